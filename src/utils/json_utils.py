"""
Helpers for pulling JSON out of free-form model output.

Strict parsing is tried first; the first bracketed region is only used as a
last resort. Failure always raises MalformedResponseError.
"""

import json
import re
from typing import Any, Dict, List

from src.core.exceptions import MalformedResponseError

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)
_ARRAY_PATTERN = re.compile(r"\[.*\]", re.DOTALL)

SNIPPET_CHARS = 200


def _strip_fences(text: str) -> str:
    text = text.strip()
    match = _FENCE_PATTERN.match(text)
    return match.group(1) if match else text


def _parse(text: str, pattern: "re.Pattern[str]", expected: type, label: str) -> Any:
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponseError(f"Empty response, expected a JSON {label}", raw=text)

    candidate = _strip_fences(text)
    try:
        parsed = json.loads(candidate)
        if isinstance(parsed, expected):
            return parsed
    except json.JSONDecodeError:
        pass

    match = pattern.search(candidate)
    if match:
        try:
            parsed = json.loads(match.group(0))
            if isinstance(parsed, expected):
                return parsed
        except json.JSONDecodeError:
            pass

    raise MalformedResponseError(
        f"Could not parse a JSON {label} from response. "
        f"Raw response: {text[:SNIPPET_CHARS]}",
        raw=text[:SNIPPET_CHARS],
    )


def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse a JSON object from model output."""
    return _parse(text, _OBJECT_PATTERN, dict, "object")


def extract_json_array(text: str) -> List[Any]:
    """Parse a JSON array from model output."""
    return _parse(text, _ARRAY_PATTERN, list, "array")
