"""
Labeled-block extraction.

Rolls copied from the card layout come out as one stream of labeled
fields:

    ১ নাম: ... ভোটার নং: ... পিতা: ... মাতা: ... পেশা: ..., জন্ম তারিখ: ... ঠিকানা: ...

Every "নাম" label starts a record; a field's value runs to the next label.
A numeral just before "নাম" is the printed serial number.
"""

from __future__ import annotations

import re

from ..models import VoterRecord
from ..rules import BENGALI
from ..utils import has_migrated_marker
from .base import BaseExtractor

# Longest alias first so "পিতার নাম" wins over "পিতা"
FIELD_LABELS: dict[str, tuple[str, ...]] = {
    "name": ("নাম",),
    "voter_id": ("ভোটার নং", "ভোটার নম্বর", "ভোটার আইডি", "আইডি নং", "ID No"),
    "father_name": ("পিতার নাম", "স্বামীর নাম", "পিতা", "স্বামী"),
    "mother_name": ("মাতার নাম", "মাতা"),
    "occupation": ("পেশা",),
    "birth_date": ("জন্ম তারিখ",),
    "address": ("ঠিকানা",),
}


def _label_key(label: str) -> str:
    return re.sub(r"\s+", "", label).lower()


_ALIAS_FIELDS = {
    _label_key(alias): field_name
    for field_name, aliases in FIELD_LABELS.items()
    for alias in aliases
}

_ALIAS_PATTERNS = sorted(
    (r"\s*".join(re.escape(part) for part in alias.split())
     for aliases in FIELD_LABELS.values() for alias in aliases),
    key=len,
    reverse=True,
)

LABEL_RE = re.compile(
    rf"(?<![{BENGALI}A-Za-z])(?P<label>{'|'.join(_ALIAS_PATTERNS)})(?![{BENGALI}A-Za-z])\s*[:：]?",
    re.IGNORECASE,
)

# Record-start line: optional serial, then the name label
RECORD_START_RE = re.compile(r"^\s*(?:[০-৯0-9]+\s*[.)]?\s*)?নাম\s*[:：]")

_SERIAL_TAIL_RE = re.compile(r"(?:^|\s)([০-৯0-9]{1,5})\s*[.)]?\s*$")
_DIGIT_RUN_RE = re.compile(r"[০-৯0-9]+")


def starts_with_label(value: str) -> bool:
    """True when a column opens with a known field label."""
    return bool(LABEL_RE.match(value.strip()))


class LabeledBlockExtractor(BaseExtractor):
    """Fallback strategy for text with no tabular rows."""

    name = "LabeledBlockExtractor"
    strategy = "labeled"

    def extract(self, text: str) -> list[VoterRecord]:
        text = self.repairer.repair(text)
        if not text:
            return []

        labels = [
            (_ALIAS_FIELDS[_label_key(m.group("label"))], m.start(), m.end())
            for m in LABEL_RE.finditer(text)
        ]
        if not any(field_name == "name" for field_name, _, _ in labels):
            return []

        serials, cuts = self._find_serials(text, labels)

        blocks: list[dict[str, str]] = []
        current = None
        for i, (field_name, _, end) in enumerate(labels):
            value_end = cuts[i + 1] if i + 1 < len(labels) else len(text)
            value = text[end:value_end]

            if field_name == "name":
                current = {"serial_number": serials.get(i, "")}
                blocks.append(current)
            elif current is None:
                # Header text before the first record
                continue

            current.setdefault(field_name, value)

        records = []
        for position, block in enumerate(blocks, start=1):
            self.stats.blocks_matched += 1
            record = self._block_to_record(block, position)
            if record is None:
                self.stats.blocks_rejected += 1
                continue
            records.append(record)

        self.log_debug("Labeled blocks", found=len(blocks), emitted=len(records))
        return records

    def _find_serials(
        self,
        text: str,
        labels: list[tuple[str, int, int]]
    ) -> tuple[dict[int, str], list[int]]:
        """
        Find serial numerals printed just before each name label.

        Returns the serial per label index, and where each label's
        preceding value ends (the serial is cut out of it).
        """
        serials: dict[int, str] = {}
        cuts = [start for _, start, _ in labels]

        for i, (field_name, start, _) in enumerate(labels):
            if field_name != "name":
                continue
            seg_start = labels[i - 1][2] if i > 0 else 0
            m = _SERIAL_TAIL_RE.search(text[seg_start:start])
            if not m:
                continue
            cut = seg_start + m.start(1)
            # A numeral that is the whole previous value belongs to it
            if i > 0 and not text[seg_start:cut].strip(" \t:;,।-"):
                continue
            serials[i] = m.group(1)
            cuts[i] = cut

        return serials, cuts

    def _block_to_record(self, block: dict[str, str], position: int):
        serial = block.get("serial_number", "")

        voter_id = block.get("voter_id", "")
        digit_run = _DIGIT_RUN_RE.search(voter_id)
        if digit_run and not has_migrated_marker(voter_id):
            voter_id = digit_run.group()

        return self.build_record(
            serial_number=serial or str(position),
            voter_id=voter_id,
            name=block.get("name", ""),
            father_name=block.get("father_name", ""),
            mother_name=block.get("mother_name", ""),
            occupation=block.get("occupation", ""),
            birth_date=block.get("birth_date", ""),
            address=block.get("address", ""),
            serial_inferred=not serial,
        )
