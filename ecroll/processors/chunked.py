"""
Chunked extraction for large pastes.

A whole constituency roll can run to tens of thousands of lines. The text
is cut into chunks at record boundaries, each chunk is extracted on a
worker thread, and the per-chunk results are reduced in chunk order on the
calling thread. Workers share nothing but the immutable rule set.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Iterable, Optional, Sequence, Union

from ..config import Config, get_config
from ..logger import get_logger
from ..models import (
    ExtractionResult,
    ExtractionStats,
    GlyphRuleSet,
    VoterRecord,
)
from ..utils.timing import timed_operation
from .base import ExtractionContext
from .block_extractor import LABEL_RE, RECORD_START_RE
from .glyph_repair import GlyphRepairer
from .record_extractor import (
    ALREADY_STORED_MESSAGE,
    VoterRecordExtractor,
    deduplicate_records,
)
from .row_extractor import is_tabular_row

logger = get_logger(__name__)

_BARE_SERIAL_RE = re.compile(r"^\s*[০-৯0-9]+\s*[.)]?\s*$")


def _serial_lines(current: list[str], repairer: GlyphRepairer) -> int:
    """
    Lines at the end of current that belong to the next labeled record.

    A serial printed on its own line above "নাম" goes with that record,
    unless it is the value of a label left open on the line before it.
    """
    if len(current) < 2 or not _BARE_SERIAL_RE.match(current[-1]):
        return 0
    previous = repairer.repair(current[-2])
    labels = list(LABEL_RE.finditer(previous))
    if labels and labels[-1].end() == len(previous):
        return 0
    return 1


def split_into_chunks(
    text: str,
    chunk_lines: int,
    min_columns: int = 5,
    repairer: Optional[GlyphRepairer] = None
) -> list[str]:
    """
    Cut text into chunks of about chunk_lines lines.

    A chunk only ends right before a line that starts a record (a tabular
    row or a "নাম" label, together with a serial printed on the line
    above it), so no record is split across chunks. Text with no such
    line stays whole.
    """
    if not text:
        return []
    lines = text.splitlines()
    if chunk_lines <= 0 or len(lines) <= chunk_lines:
        return [text]

    repairer = repairer or GlyphRepairer()
    chunks = []
    current: list[str] = []

    for line in lines:
        if len(current) >= chunk_lines:
            if is_tabular_row(line, min_columns):
                chunks.append("\n".join(current))
                current = []
            elif RECORD_START_RE.match(repairer.repair(line)):
                carried = _serial_lines(current, repairer)
                cut = len(current) - carried
                chunks.append("\n".join(current[:cut]))
                current = current[cut:]
        current.append(line)

    if current:
        chunks.append("\n".join(current))
    return chunks


def _renumber(records: list[VoterRecord], offset: int) -> list[VoterRecord]:
    """Shift position-assigned serials by the blocks seen in earlier chunks."""
    if not offset:
        return records
    return [
        replace(r, serial_number=str(int(r.serial_number) + offset))
        if r.serial_inferred and r.serial_number.isdigit() else r
        for r in records
    ]


def merge_records(
    results: Sequence[Union[ExtractionResult, Sequence[VoterRecord]]],
    existing_ids: Optional[Iterable[str]] = None
) -> ExtractionResult:
    """
    Reduce per-chunk results into one, in the order given.

    The first record seen for a voter id wins; ids in existing_ids are
    skipped. Plain record lists are accepted as chunks without stats.
    """
    stats = ExtractionStats(chunks=0)
    strategies = []
    matched = False
    seen: set[str] = set()
    existing = set(existing_ids or ())
    merged: list[VoterRecord] = []
    offset = 0

    for item in results:
        if isinstance(item, ExtractionResult):
            records = item.records
            chunk_stats = item.stats
            if item.matched:
                matched = True
                if item.strategy and item.strategy not in strategies:
                    strategies.append(item.strategy)
        else:
            records = list(item)
            chunk_stats = None
            if records:
                matched = True
                for strategy in dict.fromkeys(r.strategy for r in records):
                    if strategy and strategy not in strategies:
                        strategies.append(strategy)

        merged.extend(deduplicate_records(_renumber(records, offset), existing, stats, seen))

        stats.chunks += 1
        if chunk_stats is not None:
            stats.merge(chunk_stats)
            offset += chunk_stats.blocks_matched
        else:
            offset += sum(1 for r in records if r.serial_inferred)

    stats.records_emitted = len(merged)

    if not matched:
        return ExtractionResult.empty(stats)

    strategy = strategies[0] if len(strategies) == 1 else "mixed"
    result = ExtractionResult.ok(merged, strategy, stats)
    if not merged:
        result.message = ALREADY_STORED_MESSAGE
    return result


def extract_in_chunks(
    raw_text: Optional[str],
    rule_set: Optional[GlyphRuleSet] = None,
    config: Optional[Config] = None,
    existing_ids: Optional[Iterable[str]] = None,
    chunk_lines: Optional[int] = None,
    max_workers: Optional[int] = None,
    progress=None,
    task_id=None,
) -> ExtractionResult:
    """
    Extract a large paste on a thread pool.

    Gives the same records as extract_voter_records for input in a single
    layout. Chunk results are merged in chunk order regardless of which
    worker finishes first.

    Args:
        raw_text: Text as copied from the roll
        rule_set: Glyph rules (default: built-in set)
        config: Configuration (default: global config)
        existing_ids: Voter ids the caller already stores; skipped
        chunk_lines: Lines per chunk (default from config)
        max_workers: Worker threads (default from config)
        progress: Optional rich Progress, advanced once per chunk
        task_id: Progress task to advance
    """
    config = config or get_config()
    base_context = ExtractionContext.from_config(config, rule_set)

    chunk_lines = chunk_lines or config.extraction.chunk_lines
    max_workers = max(1, max_workers or config.extraction.max_workers)

    chunks = split_into_chunks(
        raw_text or "",
        chunk_lines,
        config.extraction.min_columns,
        base_context.repairer,
    )

    if progress is not None and task_id is not None:
        progress.update(task_id, total=max(len(chunks), 1))

    if len(chunks) <= 1:
        result = VoterRecordExtractor(base_context, existing_ids).extract(raw_text)
        if progress is not None and task_id is not None:
            progress.advance(task_id)
        return result

    logger.info(f"Extracting {len(chunks)} chunks on {min(max_workers, len(chunks))} workers")

    results: list[Optional[ExtractionResult]] = [None] * len(chunks)

    with timed_operation(f"Chunked extraction ({len(chunks)} chunks)", logger, logging.INFO) as timing:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(chunks))) as executor:
            future_to_index = {
                executor.submit(VoterRecordExtractor(base_context.spawn()).extract, chunk): index
                for index, chunk in enumerate(chunks)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    logger.error(f"Chunk {index + 1} failed: {e}")
                    results[index] = ExtractionResult.empty(ExtractionStats())
                if progress is not None and task_id is not None:
                    progress.advance(task_id)

        merged = merge_records(results, existing_ids=existing_ids)

    merged.stats.duration_sec = timing.duration_sec
    return merged
