"""
Bengali digit normalization.
"""

from __future__ import annotations

import re

BN_TO_ASCII = str.maketrans("০১২৩৪৫৬৭৮৯", "0123456789")

_NON_DIGIT_RE = re.compile(r"[^0-9]")
_DMY_RE = re.compile(r"(?<!\d)(\d{1,2})\s*[/\-.]\s*(\d{1,2})\s*[/\-.]\s*(\d{4})(?!\d)")


def bn_to_ascii(text: str) -> str:
    """Map Bengali digits (০-৯) to ASCII; everything else passes through."""
    if not text:
        return ""
    return text.translate(BN_TO_ASCII)


def digits_only(text: str) -> str:
    """ASCII digits of text, Bengali digits included, nothing else."""
    return _NON_DIGIT_RE.sub("", bn_to_ascii(text))


def normalize_birth_date(text: str) -> str:
    """
    Normalize a printed birth date.

    The first day/month/year with slash, dash or dot separators becomes
    DD/MM/YYYY; trailing noise after it is dropped. Anything else is
    returned as extracted (digits converted, trimmed).
    """
    value = bn_to_ascii(text).strip()
    m = _DMY_RE.search(value)
    if not m:
        return value
    day, month, year = m.groups()
    if not (1 <= int(day) <= 31 and 1 <= int(month) <= 12):
        return value
    return f"{int(day):02d}/{int(month):02d}/{year}"
