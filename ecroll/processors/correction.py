"""
Review-time quality checks and retro-repair of stored records.

Records saved before a rule was added keep their broken glyphs; these
helpers find them and re-run repair so a reviewer can fix them in one go.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from ..models import GlyphRuleSet, RecordIssue, VoterRecord
from ..utils import digits_only, normalize_birth_date
from .glyph_repair import GlyphRepairer

TEXT_FIELDS = ("name", "father_name", "mother_name", "occupation", "address")

# Fields a reviewer looks at when deciding a record needs fixing
REVIEW_FIELDS = ("name", "father_name")


def assess_issues(record: VoterRecord, repairer: Optional[GlyphRepairer] = None) -> list[RecordIssue]:
    repairer = repairer or GlyphRepairer()
    issues = []
    if not record.voter_id:
        issues.append(RecordIssue.AMBIGUOUS_IDENTITY)
    if any(repairer.has_artifacts(getattr(record, f)) for f in TEXT_FIELDS):
        issues.append(RecordIssue.PARTIAL_FIELD)
    return issues


def needs_repair(record: VoterRecord, repairer: Optional[GlyphRepairer] = None) -> bool:
    """True when the name or father's name still shows broken glyphs."""
    repairer = repairer or GlyphRepairer()
    return any(repairer.has_artifacts(getattr(record, f)) for f in REVIEW_FIELDS)


def find_records_needing_repair(
    records: Iterable[VoterRecord],
    rule_set: Optional[GlyphRuleSet] = None
) -> list[VoterRecord]:
    repairer = GlyphRepairer(rule_set)
    return [r for r in records if needs_repair(r, repairer)]


def repair_record(
    record: VoterRecord,
    rule_set: Optional[GlyphRuleSet] = None,
    default_occupation: Optional[str] = None
) -> VoterRecord:
    """
    Return a repaired copy of a stored record.

    Text fields are re-repaired with the current rules and numeric fields
    re-normalized. An empty occupation takes the default. Gender is left
    as stored, since a reviewer may have set it.
    """
    repairer = GlyphRepairer(rule_set)
    changes = {f: repairer.repair(getattr(record, f)) for f in TEXT_FIELDS}
    if not changes["occupation"] and default_occupation:
        changes["occupation"] = default_occupation

    repaired = replace(
        record,
        serial_number=digits_only(record.serial_number),
        voter_id=digits_only(record.voter_id),
        birth_date=normalize_birth_date(record.birth_date),
        issues=[],
        **changes,
    )
    repaired.issues = assess_issues(repaired, repairer)
    return repaired
