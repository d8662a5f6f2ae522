"""Tolerant JSON parsing for model output.

Models often wrap JSON in a markdown code fence even when told not to.
``parse_json_object`` tries the text as-is, then once more with fence
markers removed. An unclosed fence or a stray closing marker is tolerated.
"""

import json
import re
from typing import Any

from counsel_ai.exceptions import ResponseParseError

_OPENING_FENCE_RE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_CLOSING_FENCE_RE = re.compile(r"\n?```$")


def strip_code_fence(text: str) -> str:
    """Remove a leading and a trailing markdown fence marker, each if present.

    Args:
        text: Raw model output

    Returns:
        The text with fence markers removed, trimmed
    """
    stripped = _OPENING_FENCE_RE.sub("", text.strip(), count=1)
    stripped = _CLOSING_FENCE_RE.sub("", stripped.rstrip(), count=1)
    return stripped.strip()


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a JSON object out of possibly fenced model output.

    Args:
        text: Raw model output

    Returns:
        The decoded object

    Raises:
        ResponseParseError: If neither attempt yields a JSON object
    """
    if not isinstance(text, str):
        raise ResponseParseError(f"Expected text, got {type(text).__name__}")

    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError:
        try:
            data = json.loads(strip_code_fence(text))
        except json.JSONDecodeError as e:
            raise ResponseParseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data
