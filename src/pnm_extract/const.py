ERRORS = {
  "E_FORMAT_MISMATCH": "Buffer does not start with the PNG signature",
  "E_TRUNCATED": "Chunk length runs past the end of the buffer",
  "E_UNDECODABLE_TEXT": "Text chunk is not a keyword/value record",
  "E_NO_METADATA": "No recognized metadata keyword present",
}
