"""
Transcript post-processing.

Pulls the transcript out of a Gemini response and strips the timestamp
markers the model sometimes emits despite being told not to.
"""

import re
from typing import Any, Callable, Optional

# [0m5s100ms-0m10s200ms]
DURATION_RANGE_MARKER = re.compile(r"\[[0-9]+m[0-9]+s[0-9]+ms-[0-9]+m[0-9]+s[0-9]+ms\]")

# 0:00 / 00:06 at the very start of the text
LEADING_CLOCK_TIMESTAMP = re.compile(r"^[0-9]{1,2}:[0-9]{2}")

# ?00:06, .00:15, )01:05
CLOCK_TIMESTAMP_AFTER_SENTENCE = re.compile(r"(?<=[.?!)])\s*[0-9]{1,2}:[0-9]{2}")

WHITESPACE_RUN = re.compile(r"\s+")


def clean_transcript(text: str) -> str:
    """
    Remove timestamp markers and normalize whitespace.

    Args:
        text: Raw transcript text from the provider

    Returns:
        Single-line transcript with markers removed
    """
    cleaned = DURATION_RANGE_MARKER.sub("", text)
    cleaned = LEADING_CLOCK_TIMESTAMP.sub("", cleaned, count=1)
    cleaned = CLOCK_TIMESTAMP_AFTER_SENTENCE.sub(" ", cleaned)
    return WHITESPACE_RUN.sub(" ", cleaned).strip()


def _from_first_candidate(payload: dict) -> Optional[Any]:
    """candidates[0].content.parts[0].text"""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    return parts[0].get("text")


def _from_flat_text(payload: dict) -> Optional[Any]:
    return payload.get("text")


# Ordered: the first strategy yielding non-blank text wins.
EXTRACTION_STRATEGIES: list[Callable[[dict], Optional[Any]]] = [
    _from_first_candidate,
    _from_flat_text,
]


def extract_transcript(payload: dict) -> str:
    """
    Extract the transcript text from a provider response.

    Returns an empty string when no strategy finds usable text.
    """
    for strategy in EXTRACTION_STRATEGIES:
        text = strategy(payload)
        if isinstance(text, str) and text.strip():
            return text
    return ""
