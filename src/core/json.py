"""Fast, type-safe JSON encoding and parsing with multiple backends."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```) if present."""
    working_text = text.strip()
    if "```" not in working_text:
        return working_text

    if "```json" in working_text:
        start_marker = working_text.find("```json") + 7
    else:
        start_marker = working_text.find("```") + 3

    end_marker = working_text.find("```", start_marker)
    if end_marker == -1:
        return working_text[start_marker:].strip()
    return working_text[start_marker:end_marker].strip()


def extract_json_boundaries(text: str) -> tuple[int, int] | None:
    """
    Locate the outermost JSON object or array in text.

    Args:
        text: Text potentially containing JSON

    Returns:
        (start, end) slice bounds or None if not found
    """
    candidates = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not candidates:
        return None

    start = min(candidates)
    closer = "}" if text[start] == "{" else "]"
    end = text.rfind(closer)
    if end <= start:
        return None

    return (start, end + 1)


def extract_json(text: str, repair: bool = True) -> Any:
    """
    Extract and parse a JSON object or array from free text (e.g. model output).

    Args:
        text: Text containing JSON
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON value (dict or list)

    Raises:
        JSONParseError: If parsing fails
    """
    working_text = strip_code_fences(text)

    boundaries = extract_json_boundaries(working_text)
    if boundaries is None:
        raise JSONParseError("No JSON value found in text")

    start, end = boundaries
    json_str = working_text[start:end]

    # msgspec first (fastest)
    try:
        return msgspec.json.decode(json_str.encode("utf-8"))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e)

    # Last resort: json_repair
    try:
        repaired = repair_json(json_str)
        result = json.loads(repaired)
    except Exception as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error)

    if not isinstance(result, (dict, list)):
        raise JSONParseError(f"Expected object or array, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError, orjson.JSONEncodeError):
            # Edge cases such as integers outside the 64-bit range
            pass

    # stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None, ensure_ascii=False)


def dumps_bytes(obj: Any) -> bytes:
    """Compact binary encoding for transports and files."""
    return orjson.dumps(obj)


def loads(data: bytes | str) -> Any:
    """
    Decode a JSON document.

    Raises:
        JSONParseError: If the document is not valid JSON
    """
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e)
