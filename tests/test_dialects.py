from pnm_extract.dialects import CanonicalMetadata, MetadataKind, normalize, parse_parameters
from pnm_extract.text import TextRecord


def test_parameters_split():
    assert parse_parameters("A cat\nNegative prompt: blurry\nSteps: 20, Sampler: Euler") == ("A cat", "blurry")


def test_parameters_multiline_prompt():
    text = "line one,\nline two\nNegative prompt: bad hands\nSteps: 30"
    assert parse_parameters(text) == ("line one,\nline two", "bad hands")


def test_negative_accumulates_following_lines():
    text = "A cat\nNegative prompt: blurry,\nlowres\nSteps: 20"
    assert parse_parameters(text) == ("A cat", "blurry,\nlowres")


def test_size_line_terminates():
    text = "A cat\nSize: 512x512\nNegative prompt: never reached"
    assert parse_parameters(text) == ("A cat", None)


def test_no_negative_no_terminator_is_whole_prompt():
    assert parse_parameters("  A cat\nin a hat  \n") == ("A cat\nin a hat", None)


def test_empty_negative_section_is_none():
    assert parse_parameters("A cat\nNegative prompt:\nSteps: 20") == ("A cat", None)


def test_prompt_dialect_is_verbatim():
    meta = normalize([TextRecord("prompt", '{"3": {"inputs": {}}}')])
    assert meta == CanonicalMetadata('{"3": {"inputs": {}}}', None, MetadataKind.PROMPT)


def test_parameters_wins_regardless_of_order():
    params = TextRecord("parameters", "A cat\nNegative prompt: blurry\nSteps: 20")
    prompt = TextRecord("prompt", "something else")
    for records in ([prompt, params], [params, prompt]):
        meta = normalize(records)
        assert meta.kind is MetadataKind.PARAMETERS
        assert meta.prompt == "A cat"
        assert meta.negative_prompt == "blurry"
        assert meta.parameters == params.value


def test_first_record_wins_per_dialect():
    meta = normalize([TextRecord("prompt", "first"), TextRecord("prompt", "second")])
    assert meta.prompt == "first"

    meta = normalize([TextRecord("parameters", "first"), TextRecord("parameters", "second")])
    assert meta.prompt == "first"


def test_unrecognized_keywords_give_none():
    assert normalize([TextRecord("Software", "x"), TextRecord("Parameters", "y")]) is None
    assert normalize([]) is None


def test_kind_lookup():
    assert MetadataKind.for_keyword("parameters") is MetadataKind.PARAMETERS
    assert MetadataKind.for_keyword("workflow") is None


def test_to_dict():
    meta = CanonicalMetadata("A cat", "blurry", MetadataKind.PARAMETERS, "raw")
    assert meta.to_dict() == {
        "prompt": "A cat",
        "negative_prompt": "blurry",
        "kind": "parameters",
        "parameters": "raw",
    }
