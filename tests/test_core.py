from pnm_core.ids import canonicalize, record_id, source_id
from pnm_core.titles import title_from_prompt


def test_title_cuts_at_first_comma():
    assert title_from_prompt("masterpiece, a cat on a windowsill") == "masterpiece"


def test_title_limits_length():
    assert title_from_prompt("a" * 40) == "a" * 30
    assert title_from_prompt("a very long prompt without any commas at all", limit=10) == "a very lon"


def test_title_fallback():
    assert title_from_prompt("") == "AI Generated"
    assert title_from_prompt(None) == "AI Generated"
    assert title_from_prompt(", leading comma") == "AI Generated"
    assert title_from_prompt("   ", fallback="untitled") == "untitled"


def test_canonicalize():
    assert canonicalize("  A\tCAT\n ") == "a cat"
    assert canonicalize(None) == ""


def test_record_id_ignores_case_and_whitespace():
    a = record_id("parameters", "A  cat", "Blurry")
    b = record_id("parameters", "a cat", "blurry ")
    assert a == b
    assert a.startswith("m_")
    assert record_id("prompt", "a cat") != a


def test_source_id_is_deterministic():
    assert source_id(b"abc") == source_id(bytearray(b"abc"))
    assert source_id(b"abc").startswith("f_")
    assert source_id(b"abc") != source_id(b"abd")
