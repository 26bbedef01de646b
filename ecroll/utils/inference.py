"""
Heuristics applied to extracted fields.

Gender inference is a best-effort default for the review screen, not a
fact about the voter: a reviewer may override it.
"""

from __future__ import annotations

from typing import Iterable

from ..models import Gender

# Honorifics and name parts that mark a woman's entry
FEMALE_MARKERS: tuple[str, ...] = ("মোছাঃ", "বেগম", "খাতুন")

# Rows flagged as moved to another roll
MIGRATED_MARKERS: tuple[str, ...] = ("মাইগ্রেট",)

PLACEHOLDER_CHARS = frozenset("-–—_")

_FIELD_TRIM = " \t:;,।-"


def infer_gender(name: str, markers: Iterable[str] = FEMALE_MARKERS) -> Gender:
    """Female when the repaired name carries a female marker, else male."""
    if name and any(marker in name for marker in markers):
        return Gender.FEMALE
    return Gender.MALE


def has_migrated_marker(text: str, markers: Iterable[str] = MIGRATED_MARKERS) -> bool:
    return bool(text) and any(marker in text for marker in markers)


def is_placeholder(value: str) -> bool:
    """True for a dash-only cell such as "—" or "--"."""
    stripped = (value or "").strip()
    return bool(stripped) and all(c in PLACEHOLDER_CHARS for c in stripped)


def clean_field(value: str) -> str:
    """Trim separators left around a field value by label splitting."""
    return (value or "").strip(_FIELD_TRIM)
