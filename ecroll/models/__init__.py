"""
Data models for the roll repair application.

These models represent the core data structures and are designed
to be easily serializable to JSON for the review and persistence steps
owned by the caller.
"""

from .glyph_rule import GlyphRule, GlyphRuleSet
from .voter import Gender, RecordIssue, VoterRecord
from .processing_stats import ExtractionStats
from .result import (
    ExtractionResult,
    ExtractionStatus,
    MATCHED_MESSAGE,
    NO_MATCH_MESSAGE,
    matched_message,
)

__all__ = [
    # Rule models
    "GlyphRule",
    "GlyphRuleSet",

    # Voter models
    "Gender",
    "RecordIssue",
    "VoterRecord",

    # Extraction results
    "ExtractionStats",
    "ExtractionResult",
    "ExtractionStatus",
    "MATCHED_MESSAGE",
    "NO_MATCH_MESSAGE",
    "matched_message",
]
