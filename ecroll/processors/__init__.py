"""
Text processors module.

Contains the components that turn pasted EC roll text into voter records:
- GlyphRepairer: Repair mis-encoded Bengali glyphs
- TabularRowExtractor: One record per tab/space separated row
- LabeledBlockExtractor: Records from labeled fields (নাম, পিতা, ...)
- VoterRecordExtractor: Strategy selection and de-duplication
- extract_in_chunks: Thread-pool fan-out for large pastes
- repair_record: Retro-repair of stored records
"""

from .glyph_repair import GlyphRepairer, repair_text, has_artifacts
from .base import BaseExtractor, ExtractionContext
from .correction import (
    assess_issues,
    find_records_needing_repair,
    needs_repair,
    repair_record,
)
from .row_extractor import TabularRowExtractor, split_columns, is_tabular_row
from .block_extractor import LabeledBlockExtractor
from .record_extractor import (
    VoterRecordExtractor,
    deduplicate_records,
    extract_voter_records,
)
from .chunked import extract_in_chunks, merge_records, split_into_chunks

__all__ = [
    "GlyphRepairer",
    "repair_text",
    "has_artifacts",
    "BaseExtractor",
    "ExtractionContext",
    "assess_issues",
    "find_records_needing_repair",
    "needs_repair",
    "repair_record",
    "TabularRowExtractor",
    "split_columns",
    "is_tabular_row",
    "LabeledBlockExtractor",
    "VoterRecordExtractor",
    "deduplicate_records",
    "extract_voter_records",
    "extract_in_chunks",
    "merge_records",
    "split_into_chunks",
]
