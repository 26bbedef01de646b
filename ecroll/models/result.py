"""
Extraction result model.

The extractor never raises for malformed input; degradation is carried
here so the caller can decide whether to block submission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .processing_stats import ExtractionStats
from .voter import VoterRecord


NO_MATCH_MESSAGE = (
    "দুঃখিত, কোনো ভোটার তথ্য খুঁজে পাওয়া যায়নি। "
    "আপনার কপি করা টেক্সট ফরম্যাটটি কি সঠিক?"
)

MATCHED_MESSAGE = "{count} জন ভোটারের তথ্য শনাক্ত করা হয়েছে।"

_ASCII_TO_BN = str.maketrans("0123456789", "০১২৩৪৫৬৭৮৯")


def matched_message(count: int) -> str:
    """Status line for a matched result, count in Bengali digits."""
    return MATCHED_MESSAGE.format(count=str(count).translate(_ASCII_TO_BN))


class ExtractionStatus(str, Enum):
    MATCHED = "matched"
    NO_MATCH = "no_match"


@dataclass
class ExtractionResult:
    """Records for human review plus a status for the caller to display."""

    records: list[VoterRecord] = field(default_factory=list)
    status: ExtractionStatus = ExtractionStatus.NO_MATCH
    message: str = NO_MATCH_MESSAGE
    strategy: str = ""  # tabular, labeled, mixed
    stats: ExtractionStats = field(default_factory=ExtractionStats)

    @property
    def matched(self) -> bool:
        return self.status is ExtractionStatus.MATCHED

    @property
    def ambiguous_records(self) -> list[VoterRecord]:
        return [r for r in self.records if r.is_ambiguous]

    @classmethod
    def ok(
        cls,
        records: list[VoterRecord],
        strategy: str,
        stats: ExtractionStats
    ) -> "ExtractionResult":
        """Create a matched result."""
        return cls(
            records=records,
            status=ExtractionStatus.MATCHED,
            message=matched_message(len(records)),
            strategy=strategy,
            stats=stats,
        )

    @classmethod
    def empty(cls, stats: ExtractionStats) -> "ExtractionResult":
        """Create a no-match result."""
        return cls(stats=stats)

    def to_dict(self) -> dict[str, Any]:
        return {
            "matched": self.matched,
            "status": self.status.value,
            "message": self.message,
            "strategy": self.strategy,
            "records": [r.to_dict() for r in self.records],
            "stats": self.stats.to_dict(),
        }
