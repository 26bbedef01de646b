from ecroll import extract_in_chunks, extract_voter_records, merge_records
from ecroll.models import VoterRecord
from ecroll.processors import split_into_chunks

BN_DIGITS = str.maketrans("0123456789", "০১২৩৪৫৬৭৮৯")


def tabular_text(count, repeat_every=0):
    lines = ["ক্রমিক নং  ভোটার নং  নাম  পিতা  মাতা"]
    for i in range(1, count + 1):
        voter_id = 100000000 + (i % repeat_every if repeat_every else i)
        lines.append(
            f"{i}  {voter_id}  আĺুল করিম {i}  Ïমাঃ রহিম  করিমা বেগম  ০১/০১/১৯৮০".translate(BN_DIGITS)
        )
    return "\n".join(lines)


def labeled_text(count):
    return "\n".join(
        f"নাম: ব্যক্তি ভোটার নং: {200000000 + i} পিতা: রহিম পেশা: কৃষক".translate(BN_DIGITS)
        for i in range(1, count + 1)
    )


def test_chunked_tabular_extraction_matches_single_call():
    text = tabular_text(40)

    single = extract_voter_records(text)
    chunked = extract_in_chunks(text, chunk_lines=7, max_workers=3)

    assert chunked.records == single.records
    assert chunked.strategy == "tabular"
    assert chunked.stats.chunks > 1
    assert chunked.stats.records_emitted == 40


def card_text(count):
    lines = []
    for i in range(1, count + 1):
        lines += [
            f"{i}.",
            "নাম: ব্যক্তি",
            f"ভোটার নং: {300000000 + i}",
            "পিতা: রহিম",
            "পেশা: কৃষক",
        ]
    return "\n".join(lines).translate(BN_DIGITS)


def test_chunked_labeled_extraction_keeps_serial_numbering():
    text = labeled_text(10)

    single = extract_voter_records(text)
    chunked = extract_in_chunks(text, chunk_lines=3, max_workers=4)

    assert [r.serial_number for r in chunked.records] == [str(i) for i in range(1, 11)]
    assert chunked.records == single.records


def test_serial_on_its_own_line_stays_with_its_record():
    text = card_text(8)

    single = extract_voter_records(text)
    chunked = extract_in_chunks(text, chunk_lines=4, max_workers=3)

    assert chunked.stats.chunks > 1
    assert [(r.serial_number, r.occupation) for r in chunked.records] == [
        (str(i), "কৃষক") for i in range(1, 9)
    ]
    assert not any(r.serial_inferred for r in chunked.records)
    assert chunked.records == single.records


def test_split_moves_serial_line_into_the_next_chunk():
    chunks = split_into_chunks(card_text(3), chunk_lines=4)

    assert len(chunks) == 3
    assert chunks[1].startswith("২.\nনাম:")
    assert chunks[2].startswith("৩.\nনাম:")


def test_split_keeps_a_numeral_that_is_the_value_of_an_open_label():
    text = "\n".join([
        "নাম: করিম",
        "ভোটার নং: ১১১",
        "জন্ম তারিখ:",
        "১৯৭০",
        "নাম: রহিম",
        "ভোটার নং: ২২২",
    ])

    chunks = split_into_chunks(text, chunk_lines=3)

    assert chunks == ["\n".join(text.splitlines()[:4]), "\n".join(text.splitlines()[4:])]


def test_duplicates_across_chunks_keep_first_seen():
    text = tabular_text(30, repeat_every=10)

    single = extract_voter_records(text)
    chunked = extract_in_chunks(text, chunk_lines=5, max_workers=2)

    assert [r.serial_number for r in chunked.records] == [str(i) for i in range(1, 11)]
    assert chunked.records == single.records
    assert chunked.stats.duplicates_dropped == 20


def test_existing_ids_skipped_in_chunked_mode():
    text = tabular_text(12)

    result = extract_in_chunks(text, existing_ids={"100000001"}, chunk_lines=4)

    assert "100000001" not in [r.voter_id for r in result.records]
    assert len(result.records) == 11
    assert result.stats.existing_skipped == 1


def test_chunked_no_match():
    result = extract_in_chunks("just some words\n" * 50, chunk_lines=10)

    assert not result.matched


def test_split_never_cuts_inside_a_labeled_record():
    text = "\n".join(["নাম: ক", "ভোটার নং: ১", "পিতা: খ"] * 5)

    chunks = split_into_chunks(text, chunk_lines=2)

    assert len(chunks) == 5
    assert all(chunk.startswith("নাম") for chunk in chunks)
    assert "\n".join(chunks) == text


def test_short_text_is_one_chunk():
    assert split_into_chunks("a\nb", chunk_lines=10) == ["a\nb"]
    assert split_into_chunks("", chunk_lines=10) == []


def test_merge_record_lists_in_order():
    first = VoterRecord(serial_number="1", voter_id="111", name="ক", strategy="tabular")
    second = VoterRecord(serial_number="2", voter_id="222", name="খ", strategy="tabular")
    again = VoterRecord(serial_number="3", voter_id="111", name="গ", strategy="tabular")
    third = VoterRecord(serial_number="4", voter_id="333", name="ঘ", strategy="tabular")

    result = merge_records([[first, second], [again, third]])

    assert [r.name for r in result.records] == ["ক", "খ", "ঘ"]
    assert result.strategy == "tabular"
    assert result.stats.chunks == 2
    assert result.stats.duplicates_dropped == 1


def test_merge_nothing():
    assert not merge_records([]).matched
