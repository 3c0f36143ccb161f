"""Shared helpers for word normalization."""

from __future__ import annotations

import re

WORD_RE = re.compile(r"^[a-z]+$")


def clean_word(text: str) -> str:
    """Return the lowercase form of ``text`` or ``""`` if it is not a plain word."""

    if not text:
        return ""
    candidate = text.strip().lower()
    if not WORD_RE.match(candidate):
        return ""
    return candidate


__all__ = ["clean_word", "WORD_RE"]
