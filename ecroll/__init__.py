"""
Repair and extraction of voter records from text copied out of
Bangladesh Election Commission roll PDFs.

Usage:
    from ecroll import extract_voter_records

    result = extract_voter_records(pasted_text)
    if not result.matched:
        print(result.message)
"""

from .models import (
    ExtractionResult,
    ExtractionStats,
    Gender,
    GlyphRule,
    GlyphRuleSet,
    RecordIssue,
    VoterRecord,
)
from .processors import (
    extract_in_chunks,
    extract_voter_records,
    find_records_needing_repair,
    has_artifacts,
    merge_records,
    repair_record,
    repair_text,
)
from .rules import DEFAULT_RULE_SET, load_rule_set
from .utils import bn_to_ascii

__version__ = "0.1.0"

__all__ = [
    "ExtractionResult",
    "ExtractionStats",
    "Gender",
    "GlyphRule",
    "GlyphRuleSet",
    "RecordIssue",
    "VoterRecord",
    "extract_in_chunks",
    "extract_voter_records",
    "find_records_needing_repair",
    "has_artifacts",
    "merge_records",
    "repair_record",
    "repair_text",
    "DEFAULT_RULE_SET",
    "load_rule_set",
    "bn_to_ascii",
]
