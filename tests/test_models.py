import re
from datetime import date

import pytest

from ecroll.models import (
    ExtractionResult,
    ExtractionStats,
    Gender,
    GlyphRule,
    RecordIssue,
    VoterRecord,
)
from ecroll.rules import DEFAULT_RULE_SET


def make_record(**overrides):
    fields = dict(
        serial_number="1",
        voter_id="123456789",
        name="করিম উদ্দিন",
        father_name="রহিম উদ্দিন",
        mother_name="জমিলা বেগম",
        occupation="কৃষক",
        birth_date="12/05/1980",
    )
    fields.update(overrides)
    return VoterRecord(**fields)


def test_age_on_reference_date():
    record = make_record()

    assert record.age_on(date(2024, 5, 12)) == 44
    assert record.age_on(date(2024, 5, 11)) == 43


def test_age_is_none_for_unusable_birth_dates():
    assert make_record(birth_date="1980").age_on(date(2024, 1, 1)) is None
    assert make_record(birth_date="31/02/1980").age_on(date(2024, 1, 1)) is None
    assert make_record(birth_date="01/01/2030").age_on(date(2024, 1, 1)) is None


def test_emittable_needs_name_and_identity():
    assert make_record().is_emittable
    assert make_record(voter_id="").is_emittable
    assert not make_record(voter_id="", serial_number="").is_emittable
    assert not make_record(name="").is_emittable


def test_record_dict_round_trip_keeps_enums():
    record = make_record(gender=Gender.FEMALE, issues=[RecordIssue.AMBIGUOUS_IDENTITY])

    data = record.to_dict()
    assert data["gender"] == "Female"
    assert data["issues"] == ["ambiguous_identity"]

    restored = VoterRecord.from_dict({**data, "unknown": "ignored"})
    assert restored == record
    assert restored.is_ambiguous


def test_gender_bengali_label():
    assert Gender.FEMALE.bn_label == "মহিলা"
    assert Gender.MALE.bn_label == "পুরুষ"


def test_stats_merge():
    first = ExtractionStats(lines_scanned=10, rows_matched=4, duplicates_dropped=1)
    second = ExtractionStats(lines_scanned=5, blocks_matched=2, blocks_rejected=1)

    first.merge(second)

    assert first.lines_scanned == 15
    assert first.rows_matched == 4
    assert first.blocks_matched == 2
    assert first.blocks_rejected == 1
    assert first.duplicates_dropped == 1


def test_empty_result_is_not_matched():
    result = ExtractionResult.empty(ExtractionStats())

    assert not result.matched
    assert result.records == []
    assert result.to_dict()["status"] == "no_match"


def test_extended_rule_set_keeps_order_and_base():
    extra = GlyphRule("োবগম", "বেগম", regex=False)
    extended = DEFAULT_RULE_SET.extended(char_map={"Ǻ": "ক্ষ"}, rules=[extra])

    assert extended.rules[-1] == extra
    assert extended.char_map["Ǻ"] == "ক্ষ"
    assert extended.version == DEFAULT_RULE_SET.version
    assert "Ǻ" not in DEFAULT_RULE_SET.char_map


def test_bad_regex_rule_is_rejected():
    with pytest.raises(re.error):
        GlyphRule("(", "")
