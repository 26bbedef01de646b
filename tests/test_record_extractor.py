import pytest

from ecroll import extract_voter_records
from ecroll.models import NO_MATCH_MESSAGE, Gender, VoterRecord, matched_message
from ecroll.processors.record_extractor import ALREADY_STORED_MESSAGE, deduplicate_records

ROW = "১  ১২৩৪৫৬৭৮৯  করিম উদ্দিন  রহিম উদ্দিন  জমিলা বেগম  ১২/০৫/১৯৮০"
BLOCK = (
    "নাম: জমিলা বেগম ভোটার নং: ৯৮৭৬৫৪৩২১ পিতা: করিম উদ্দিন "
    "মাতা: রহিমা বেগম পেশা: গৃহিণী, জন্ম তারিখ: ০১/০১/১৯৯০"
)


@pytest.mark.parametrize("text", ["", "   \n\t ", None, "hello world", "ক্রমিক নং  ভোটার নং"])
def test_no_match(text):
    result = extract_voter_records(text)

    assert not result.matched
    assert result.records == []
    assert result.message == NO_MATCH_MESSAGE


def test_tabular_rows_win_over_labeled_blocks():
    result = extract_voter_records(ROW + "\n" + BLOCK)

    assert result.matched
    assert result.strategy == "tabular"
    assert [r.voter_id for r in result.records] == ["123456789"]
    assert result.records[0].gender is Gender.MALE


def test_matched_message_is_in_bengali():
    text = "\n".join([
        ROW,
        "২  ২২২২২২২২২  সেলিম  হাকিম  সালমা",
    ])

    result = extract_voter_records(text)

    assert result.message == "২ জন ভোটারের তথ্য শনাক্ত করা হয়েছে।"
    assert result.message == matched_message(2)
    assert matched_message(12) == "১২ জন ভোটারের তথ্য শনাক্ত করা হয়েছে।"


def test_labeled_blocks_used_when_no_rows():
    result = extract_voter_records(BLOCK)

    assert result.matched
    assert result.strategy == "labeled"
    assert result.records[0].voter_id == "987654321"
    assert result.records[0].gender is Gender.FEMALE


def test_tabular_fixture(fixtures_dir):
    text = (fixtures_dir / "tabular_roll.txt").read_text(encoding="utf-8")

    result = extract_voter_records(text)

    assert [r.serial_number for r in result.records] == ["1", "2", "5"]
    assert result.records[1].name == "মোছাঃ রহিমা খাতুন"
    assert result.records[2].name == "মোঃ ইব্রাহিম"
    assert result.records[2].father_name == "মোঃ আব্দুর রহমান"
    assert result.stats.rows_matched == 6
    assert result.stats.rows_rejected == 2
    assert result.stats.duplicates_dropped == 1
    assert result.stats.records_emitted == 3


def test_first_record_per_voter_id_wins():
    text = "\n".join([
        "১  ১১১১১১১১১  করিম উদ্দিন  রহিম  করিমা",
        "২  ১১১১১১১১১  অন্য নাম  রহিম  করিমা",
        "৩  ২২২২২২২২২  সেলিম  হাকিম  সালমা",
    ])

    result = extract_voter_records(text)

    assert [r.name for r in result.records] == ["করিম উদ্দিন", "সেলিম"]
    assert result.stats.duplicates_dropped == 1


def test_records_without_voter_id_are_never_merged():
    result = extract_voter_records("নাম: করিম পিতা: রহিম নাম: করিম পিতা: রহিম")

    assert len(result.records) == 2
    assert len(result.ambiguous_records) == 2


def test_existing_ids_are_skipped():
    text = "\n".join([
        "১  ১১১১১১১১১  করিম উদ্দিন  রহিম  করিমা",
        "২  ২২২২২২২২২  সেলিম  হাকিম  সালমা",
    ])

    result = extract_voter_records(text, existing_ids={"১১১১১১১১১"})

    assert [r.voter_id for r in result.records] == ["222222222"]
    assert result.stats.existing_skipped == 1


def test_all_records_already_stored():
    result = extract_voter_records(ROW, existing_ids=["123456789"])

    assert result.matched
    assert result.records == []
    assert result.message == ALREADY_STORED_MESSAGE


def test_deduplicate_records_keeps_input_order():
    records = [
        VoterRecord(serial_number="1", voter_id="333", name="গণেশ"),
        VoterRecord(serial_number="2", voter_id="111", name="কমল"),
        VoterRecord(serial_number="3", voter_id="333", name="চন্দন"),
        VoterRecord(serial_number="4", name="ছবি"),
    ]

    kept = deduplicate_records(records)

    assert [r.serial_number for r in kept] == ["1", "2", "4"]
