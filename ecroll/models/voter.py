"""
Voter data models.

Represents individual voter records extracted from pasted EC roll text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Optional, Any


class Gender(str, Enum):
    """Inferred gender. Heuristic default, never authoritative."""

    MALE = "Male"
    FEMALE = "Female"

    @property
    def bn_label(self) -> str:
        """Bengali label as stored by the portal (পুরুষ / মহিলা)."""
        return "মহিলা" if self is Gender.FEMALE else "পুরুষ"


class RecordIssue(str, Enum):
    """Residual-quality flags surfaced for human review."""

    # No voter id: kept, never merged with other id-less records
    AMBIGUOUS_IDENTITY = "ambiguous_identity"
    # A text field still carries anomaly glyphs after repair
    PARTIAL_FIELD = "partial_field"


_DATE_RE = re.compile(r"(\d{2})/(\d{2})/(\d{4})")


@dataclass
class VoterRecord:
    """
    One person's entry in an official roll.

    Text fields are repaired Bengali; serial number, voter id and birth
    date carry ASCII digits. Gender is inferred from honorifics in the
    name and may be overridden by a reviewer.
    """

    serial_number: str = ""
    voter_id: str = ""

    name: str = ""
    father_name: str = ""
    mother_name: str = ""
    occupation: str = ""
    birth_date: str = ""  # DD/MM/YYYY when derivable
    address: str = ""

    gender: Gender = Gender.MALE

    # Extraction metadata
    strategy: str = ""  # tabular, labeled
    # Serial assigned by position because the roll printed none
    serial_inferred: bool = False
    issues: list[RecordIssue] = field(default_factory=list)

    def __post_init__(self):
        self.serial_number = self.serial_number.strip()
        self.voter_id = self.voter_id.strip()
        self.name = self.name.strip()
        self.father_name = self.father_name.strip()
        self.mother_name = self.mother_name.strip()
        self.occupation = self.occupation.strip()
        self.birth_date = self.birth_date.strip()
        self.address = self.address.strip()
        if not isinstance(self.gender, Gender):
            self.gender = Gender(self.gender)
        self.issues = [RecordIssue(i) for i in self.issues]

    @property
    def is_emittable(self) -> bool:
        """A record needs a name and at least one identity field."""
        return bool(self.name and (self.voter_id or self.serial_number))

    @property
    def is_ambiguous(self) -> bool:
        return RecordIssue.AMBIGUOUS_IDENTITY in self.issues

    def age_on(self, reference: Optional[date] = None) -> Optional[int]:
        """
        Age in whole years on the reference date (default: today).

        Returns None when the birth date is not in DD/MM/YYYY form or
        does not name a real day.
        """
        m = _DATE_RE.fullmatch(self.birth_date)
        if not m:
            return None
        day, month, year = (int(g) for g in m.groups())
        try:
            born = date(year, month, day)
        except ValueError:
            return None
        reference = reference or date.today()
        if born > reference:
            return None
        had_birthday = (reference.month, reference.day) >= (born.month, born.day)
        return reference.year - born.year - (0 if had_birthday else 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["gender"] = self.gender.value
        data["issues"] = [issue.value for issue in self.issues]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VoterRecord":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
