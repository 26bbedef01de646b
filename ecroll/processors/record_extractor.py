"""
Voter record extraction: strategy selection and de-duplication.

Tabular rows are tried first; labeled blocks only when no tabular row
produced a record. The result never raises for malformed input.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..config import Config, get_config
from ..logger import get_logger, log_timing
from ..models import ExtractionResult, ExtractionStats, GlyphRuleSet, VoterRecord
from ..utils import digits_only
from ..utils.timing import Timer
from .base import ExtractionContext
from .block_extractor import LabeledBlockExtractor
from .row_extractor import TabularRowExtractor

logger = get_logger(__name__)

ALREADY_STORED_MESSAGE = "সব ভোটার ইতিপূর্বেই সংরক্ষিত আছে।"


def deduplicate_records(
    records: Iterable[VoterRecord],
    existing_ids: Optional[Iterable[str]] = None,
    stats: Optional[ExtractionStats] = None,
    seen: Optional[set[str]] = None,
) -> list[VoterRecord]:
    """
    Keep the first record per voter id, in input order.

    Records without a voter id are never merged with each other. Ids in
    existing_ids (already stored by the caller) are skipped.
    """
    existing = {digits_only(i) for i in existing_ids or ()}
    seen = set() if seen is None else seen
    kept = []

    for record in records:
        if record.voter_id:
            if record.voter_id in existing:
                if stats is not None:
                    stats.existing_skipped += 1
                continue
            if record.voter_id in seen:
                if stats is not None:
                    stats.duplicates_dropped += 1
                continue
            seen.add(record.voter_id)
        kept.append(record)

    return kept


class VoterRecordExtractor:
    """
    Runs the extraction strategies over one piece of pasted text.

    Usage:
        extractor = VoterRecordExtractor()
        result = extractor.extract(text)
        for record in result.records:
            print(record.voter_id, record.name)
    """

    def __init__(
        self,
        context: Optional[ExtractionContext] = None,
        existing_ids: Optional[Iterable[str]] = None
    ):
        self.context = context or ExtractionContext()
        self.existing_ids = set(existing_ids or ())

    def extract(self, raw_text: Optional[str]) -> ExtractionResult:
        timer = Timer()
        stats = self.context.stats

        if not raw_text or not raw_text.strip():
            stats.duration_sec = timer.elapsed
            return ExtractionResult.empty(stats)

        strategy = TabularRowExtractor.strategy
        records = TabularRowExtractor(self.context).run(raw_text)
        if not records:
            strategy = LabeledBlockExtractor.strategy
            records = LabeledBlockExtractor(self.context).run(raw_text)

        if not records:
            stats.duration_sec = timer.elapsed
            logger.debug(f"No voter records found ({stats.lines_scanned} lines)")
            return ExtractionResult.empty(stats)

        records = deduplicate_records(records, self.existing_ids, stats)
        stats.records_emitted = len(records)
        stats.duration_sec = timer.elapsed
        log_timing(logger, f"Extraction ({strategy}, {len(records)} records)", stats.duration_sec)

        result = ExtractionResult.ok(records, strategy, stats)
        if not records:
            result.message = ALREADY_STORED_MESSAGE
        return result


def extract_voter_records(
    raw_text: Optional[str],
    rule_set: Optional[GlyphRuleSet] = None,
    config: Optional[Config] = None,
    existing_ids: Optional[Iterable[str]] = None
) -> ExtractionResult:
    """
    Extract voter records from pasted roll text.

    Args:
        raw_text: Text as copied from the roll (may be empty)
        rule_set: Glyph rules (default: built-in set)
        config: Configuration (default: global config)
        existing_ids: Voter ids the caller already stores; skipped

    Returns:
        ExtractionResult; matched is False when neither strategy found
        anything
    """
    context = ExtractionContext.from_config(config or get_config(), rule_set)
    return VoterRecordExtractor(context, existing_ids).extract(raw_text)
