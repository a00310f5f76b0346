import pytest

from jocn.timers import reset_timers, timer, timer_summary


def test_timer_accumulates():
    with timer("bulk_test"):
        pass
    with timer("bulk_test"):
        pass
    stats = timer_summary()["bulk_test"]
    assert stats.count == 2
    assert stats.total_seconds >= 0.0


def test_timer_records_on_error():
    with pytest.raises(RuntimeError):
        with timer("bulk_failing"):
            raise RuntimeError("boom")
    assert timer_summary()["bulk_failing"].count == 1


def test_reset_timers():
    with timer("bulk_test"):
        pass
    reset_timers()
    assert timer_summary() == {}


def test_summary_is_a_snapshot():
    with timer("bulk_test"):
        pass
    summary = timer_summary()
    reset_timers()
    assert "bulk_test" in summary
