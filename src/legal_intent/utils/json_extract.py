"""Recover a JSON object from chatty model output using orjson."""

import re
from typing import Any, Dict, List, Optional

import orjson

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```", re.IGNORECASE)
_BARE_OBJECT = re.compile(r"\{[\s\S]*\}")


def _candidates(text: str) -> List[str]:
    found: List[str] = []
    fenced = _FENCED_BLOCK.search(text)
    if fenced:
        found.append(fenced.group(1))
    bare = _BARE_OBJECT.search(text)
    if bare:
        found.append(bare.group(0))
    found.append(text.strip())
    return found


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Extract the first JSON object found in a model response.

    Tries a fenced code block, then the outermost ``{...}`` span, then the
    raw text.

    Args:
        text: Raw completion text

    Returns:
        Parsed object, or None when nothing parses to a JSON object
    """
    if not text or not isinstance(text, str):
        return None
    for candidate in _candidates(text):
        try:
            payload = orjson.loads(candidate)
        except orjson.JSONDecodeError:
            continue
        if isinstance(payload, dict):
            return payload
    return None
