"""
Utility functions for the roll repair application.
"""

from .digits import (
    bn_to_ascii,
    digits_only,
    normalize_birth_date,
)

from .inference import (
    FEMALE_MARKERS,
    MIGRATED_MARKERS,
    infer_gender,
    has_migrated_marker,
    is_placeholder,
    clean_field,
)

from .timing import (
    timed_operation,
    Timer,
    format_duration,
)

__all__ = [
    # Digit utilities
    "bn_to_ascii",
    "digits_only",
    "normalize_birth_date",

    # Field heuristics
    "FEMALE_MARKERS",
    "MIGRATED_MARKERS",
    "infer_gender",
    "has_migrated_marker",
    "is_placeholder",
    "clean_field",

    # Timing utilities
    "timed_operation",
    "Timer",
    "format_duration",
]
