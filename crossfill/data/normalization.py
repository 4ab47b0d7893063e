"""Shared helpers for word normalization."""

from __future__ import annotations


def normalize_word(text: str) -> str:
    """Return the canonical uppercase form of a dictionary line."""

    if not text:
        return ""
    return text.strip().upper()


__all__ = ["normalize_word"]
