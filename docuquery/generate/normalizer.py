# Pull a single answer string out of a generateContent reply.
#
# Gemini has returned a few different shapes over time, so the extractors
# below are tried in a fixed order. The first one that yields a non-empty
# string wins; the rest are never consulted.

from __future__ import annotations
from typing import Any, Callable, List, Optional, Union

SENTINEL_TEXT = "I'm sorry — the model returned no readable text."


class NoReadableText:
    """Marker for "no known shape matched"."""

    def __repr__(self) -> str:
        return "NO_READABLE_TEXT"


NO_READABLE_TEXT = NoReadableText()

Extractor = Callable[[Any], Optional[Any]]


def _first(seq: Any) -> Optional[Any]:
    if isinstance(seq, list) and seq:
        return seq[0]
    return None


def _get(obj: Any, key: str) -> Optional[Any]:
    if isinstance(obj, dict):
        return obj.get(key)
    return None


def _first_candidate(payload: Any) -> Optional[Any]:
    return _first(_get(payload, "candidates"))


def from_content_parts(payload: Any) -> Optional[Any]:
    """candidates[0].content.parts[0].text (the documented shape)"""
    content = _get(_first_candidate(payload), "content")
    return _get(_first(_get(content, "parts")), "text")


def from_content_list(payload: Any) -> Optional[Any]:
    """candidates[0].content[0].text"""
    return _get(_first(_get(_first_candidate(payload), "content")), "text")


def from_candidate_output(payload: Any) -> Optional[Any]:
    """candidates[0].output"""
    return _get(_first_candidate(payload), "output")


def from_top_level_text(payload: Any) -> Optional[Any]:
    """text"""
    return _get(payload, "text")


EXTRACTORS: List[Extractor] = [
    from_content_parts,
    from_content_list,
    from_candidate_output,
    from_top_level_text,
]


def extract_text(payload: Any) -> Union[str, NoReadableText]:
    for extractor in EXTRACTORS:
        value = extractor(payload)
        if isinstance(value, str) and value:
            return value
    return NO_READABLE_TEXT


def normalize(payload: Any) -> str:
    text = extract_text(payload)
    if text is NO_READABLE_TEXT:
        return SENTINEL_TEXT
    return text
