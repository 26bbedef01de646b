"""
Extraction statistics.

Counts gathered while turning pasted text into voter records.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


@dataclass
class ExtractionStats:
    """Counts and timing for one extraction call (or a merged batch)."""

    lines_scanned: int = 0
    rows_matched: int = 0
    rows_rejected: int = 0
    blocks_matched: int = 0
    blocks_rejected: int = 0
    duplicates_dropped: int = 0
    existing_skipped: int = 0
    records_emitted: int = 0
    chunks: int = 1
    duration_sec: float = 0.0

    def merge(self, other: "ExtractionStats") -> None:
        """Accumulate another call's counts (chunk reduce step)."""
        self.lines_scanned += other.lines_scanned
        self.rows_matched += other.rows_matched
        self.rows_rejected += other.rows_rejected
        self.blocks_matched += other.blocks_matched
        self.blocks_rejected += other.blocks_rejected
        self.duplicates_dropped += other.duplicates_dropped
        self.existing_skipped += other.existing_skipped

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["duration_sec"] = round(self.duration_sec, 4)
        return data

    def summary_str(self) -> str:
        """Generate a human-readable summary string."""
        lines = [
            "Extraction Summary:",
            f"  Lines scanned: {self.lines_scanned}",
            f"  Rows: {self.rows_matched} matched, {self.rows_rejected} rejected",
            f"  Blocks: {self.blocks_matched} matched, {self.blocks_rejected} rejected",
            f"  Records emitted: {self.records_emitted}",
        ]
        if self.duplicates_dropped:
            lines.append(f"  Duplicates dropped: {self.duplicates_dropped}")
        if self.existing_skipped:
            lines.append(f"  Already stored: {self.existing_skipped}")
        if self.chunks > 1:
            lines.append(f"  Chunks: {self.chunks}")
        lines.append(f"  Total time: {self.duration_sec:.3f}s")
        return "\n".join(lines)
