from ecroll import find_records_needing_repair, repair_record
from ecroll.models import Gender, RecordIssue, VoterRecord
from ecroll.processors import assess_issues


def broken_record():
    return VoterRecord(
        serial_number="১",
        voter_id="১২৩৪৫৬৭৮৯",
        name="আĺুল হাĨান",
        father_name="Ïমাঃ রহিম",
        mother_name="করিমা বেগম",
        birth_date="৫/৬/১৯৭৫",
        gender=Gender.FEMALE,
    )


def test_repair_record_fixes_text_and_digits():
    repaired = repair_record(broken_record(), default_occupation="ভোটার")

    assert repaired.name == "আব্দুল হাসান"
    assert repaired.father_name == "মোঃ রহিম"
    assert repaired.occupation == "ভোটার"
    assert repaired.serial_number == "1"
    assert repaired.voter_id == "123456789"
    assert repaired.birth_date == "05/06/1975"
    assert repaired.issues == []


def test_repair_record_keeps_reviewed_gender_and_original():
    record = broken_record()

    repaired = repair_record(record)

    assert repaired.gender is Gender.FEMALE
    assert record.name == "আĺুল হাĨান"
    assert repaired.occupation == ""


def test_repair_record_is_idempotent():
    once = repair_record(broken_record(), default_occupation="ভোটার")

    assert repair_record(once, default_occupation="ভোটার") == once


def test_find_records_needing_repair():
    clean = VoterRecord(serial_number="2", voter_id="2", name="করিম", father_name="রহিম")
    broken = broken_record()

    assert find_records_needing_repair([clean, broken]) == [broken]


def test_assess_issues():
    partial = VoterRecord(serial_number="3", name="করিম Ã", father_name="রহিম")

    issues = assess_issues(partial)

    assert RecordIssue.AMBIGUOUS_IDENTITY in issues
    assert RecordIssue.PARTIAL_FIELD in issues
