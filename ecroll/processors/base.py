"""
Base extractor class and extraction context.

Provides common functionality for the extraction strategies including
logging, timing, error handling, configuration access and the shared
raw-fields-to-record step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Any

from ..config import Config, ExtractionConfig, get_config
from ..logger import get_logger
from ..models import ExtractionStats, GlyphRuleSet, VoterRecord
from ..rules import DEFAULT_RULE_SET
from ..utils import (
    clean_field,
    digits_only,
    has_migrated_marker,
    infer_gender,
    is_placeholder,
    normalize_birth_date,
)
from ..utils.timing import Timer
from .correction import assess_issues
from .glyph_repair import GlyphRepairer


@dataclass
class ExtractionContext:
    """
    State for one extraction call.

    Each call (or each chunk of a chunked call) owns its context, so
    strategies running on worker threads never share counters.
    """

    config: ExtractionConfig = field(default_factory=lambda: get_config().extraction)
    rule_set: GlyphRuleSet = DEFAULT_RULE_SET
    debug: bool = field(default_factory=lambda: get_config().debug)

    stats: ExtractionStats = field(default_factory=ExtractionStats)

    _repairer: Optional[GlyphRepairer] = field(default=None, init=False, repr=False)

    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        rule_set: Optional[GlyphRuleSet] = None
    ) -> "ExtractionContext":
        config = config or get_config()
        return cls(
            config=config.extraction,
            rule_set=rule_set or DEFAULT_RULE_SET,
            debug=config.debug,
        )

    @property
    def repairer(self) -> GlyphRepairer:
        if self._repairer is None:
            self._repairer = GlyphRepairer(self.rule_set)
        return self._repairer

    def spawn(self) -> "ExtractionContext":
        """Fresh context with the same settings and empty stats."""
        return ExtractionContext(config=self.config, rule_set=self.rule_set, debug=self.debug)


class BaseExtractor(ABC):
    """
    Abstract base class for extraction strategies.

    Provides:
    - Consistent logging
    - Timing instrumentation
    - Error handling
    - Record construction and rejection rules
    """

    # Extractor name for logging (override in subclass)
    name: str = "BaseExtractor"
    # Strategy tag stamped on emitted records
    strategy: str = ""

    def __init__(self, context: Optional[ExtractionContext] = None):
        self.context = context or ExtractionContext()
        self.config = self.context.config
        self.stats = self.context.stats
        self.repairer = self.context.repairer
        self.logger = get_logger(self.name)
        self._timer = Timer()

    @property
    def debug_mode(self) -> bool:
        return self.context.debug

    def log_debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message (only in debug mode)."""
        if self.debug_mode:
            extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
            self.logger.debug(f"{message} {extra}".strip())

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        if error:
            self.logger.error(f"{message}: {error}", exc_info=self.debug_mode)
        else:
            self.logger.error(message)

    @abstractmethod
    def extract(self, text: str) -> list[VoterRecord]:
        """
        Find voter records in text.

        Returns:
            Records in input order (possibly empty)
        """
        pass

    def run(self, text: str) -> list[VoterRecord]:
        """
        Run the strategy with timing and error handling.

        Malformed input never escapes as an exception: a strategy that
        fails is logged and contributes no records.
        """
        self._timer = Timer()

        try:
            records = self.extract(text)
            self.log_debug(
                f"Completed {self.name}",
                records=len(records),
                duration=f"{self._timer.elapsed:.3f}s"
            )
            return records

        except Exception as e:
            self.log_error(f"{self.name} failed after {self._timer.elapsed:.2f}s", error=e)
            return []

    def repair(self, value: str) -> str:
        return self.repairer.repair(clean_field(value))

    def build_record(
        self,
        serial_number: str = "",
        voter_id: str = "",
        name: str = "",
        father_name: str = "",
        mother_name: str = "",
        occupation: str = "",
        birth_date: str = "",
        address: str = "",
        serial_inferred: bool = False,
    ) -> Optional[VoterRecord]:
        """
        Turn raw field values into a record, or None when rejected.

        Text fields are repaired; numeric fields get ASCII digits. Rows
        whose id cell is only a dash, rows marked as migrated, and rows
        without a name or any identity field are rejected.
        """
        if is_placeholder(voter_id):
            self.log_debug("Rejected placeholder voter id", serial=serial_number)
            return None

        repaired_name = self.repair(name)
        raw_fields = (voter_id, father_name, mother_name, occupation, birth_date, address)
        if has_migrated_marker(repaired_name) or any(
            has_migrated_marker(self.repairer.repair(value)) for value in raw_fields
        ):
            self.log_debug("Rejected migrated entry", name=repaired_name)
            return None

        record = VoterRecord(
            serial_number=digits_only(serial_number),
            voter_id=digits_only(voter_id),
            name=repaired_name,
            father_name=self.repair(father_name),
            mother_name=self.repair(mother_name),
            occupation=self.repair(occupation) or self.config.default_occupation,
            birth_date=normalize_birth_date(clean_field(birth_date)),
            address=self.repair(address),
            gender=infer_gender(repaired_name),
            strategy=self.strategy,
            serial_inferred=serial_inferred,
        )

        if not record.is_emittable:
            self.log_debug("Rejected record without name or identity", name=record.name)
            return None

        record.issues = assess_issues(record, self.repairer)
        return record
