import logging

import pytest

from ecroll.utils import Timer, format_duration, timed_operation


@pytest.mark.parametrize("seconds, expected", [
    (0.0005, "500µs"),
    (0.25, "250.0ms"),
    (2.5, "2.50s"),
    (75, "1m 15.0s"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_timed_operation_logs_duration(caplog):
    logger = logging.getLogger("ecroll.test.timed")

    with caplog.at_level(logging.INFO, logger="ecroll.test.timed"):
        with timed_operation("Chunked extraction", logger, logging.INFO) as timing:
            pass

    assert timing.success
    assert timing.duration_sec >= 0
    assert caplog.records[-1].getMessage().startswith("Chunked extraction: ")


def test_timed_operation_records_failure(caplog):
    logger = logging.getLogger("ecroll.test.timed_failure")

    with caplog.at_level(logging.DEBUG, logger="ecroll.test.timed_failure"):
        with pytest.raises(ValueError):
            with timed_operation("Broken step", logger) as timing:
                raise ValueError("bad chunk")

    assert not timing.success
    assert timing.error == "bad chunk"
    assert "(failed: bad chunk)" in caplog.records[-1].getMessage()


def test_timer_elapsed_grows():
    timer = Timer()
    first = timer.elapsed

    assert first >= 0
    assert timer.elapsed >= first
