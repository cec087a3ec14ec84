import pytest

from swiftype_enterprise.errors import Timeout
from swiftype_enterprise.polling import poll


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_returns_first_non_false_result():
    clock = FakeClock()
    results = iter([False, False, "done"])
    calls = []

    def check():
        calls.append(clock.now)
        return next(results)

    assert poll(check, timeout=10, interval=1, clock=clock, sleep=clock.sleep) == "done"
    assert calls == [0.0, 1.0, 2.0]
    assert clock.sleeps == [1, 1]


def test_falsy_values_other_than_false_are_results():
    clock = FakeClock()
    assert poll(lambda: [], timeout=1, clock=clock, sleep=clock.sleep) == []
    assert poll(lambda: None, timeout=1, clock=clock, sleep=clock.sleep) is None
    assert clock.sleeps == []


def test_times_out_without_attempts_after_deadline():
    clock = FakeClock()
    calls = []

    def check():
        calls.append(clock.now)
        return False

    with pytest.raises(Timeout):
        poll(check, timeout=3, interval=1, clock=clock, sleep=clock.sleep)
    assert calls == [0.0, 1.0, 2.0]
    assert clock.now == 3.0


def test_sleep_is_capped_at_deadline():
    clock = FakeClock()
    with pytest.raises(Timeout):
        poll(lambda: False, timeout=2.5, interval=1, clock=clock, sleep=clock.sleep)
    assert clock.sleeps == [1, 1, 0.5]


def test_slow_check_overrunning_deadline_times_out():
    clock = FakeClock()

    def slow_check():
        clock.now += 0.05
        return ["late"]

    with pytest.raises(Timeout):
        poll(slow_check, timeout=0.01, clock=clock, sleep=clock.sleep)


def test_timeout_is_a_builtin_timeout_error():
    clock = FakeClock()
    with pytest.raises(TimeoutError):
        poll(lambda: False, timeout=0, clock=clock, sleep=clock.sleep)


@pytest.mark.parametrize("kwargs", [{"timeout": -1}, {"interval": -0.1}])
def test_rejects_negative_durations(kwargs):
    with pytest.raises(ValueError):
        poll(lambda: True, **kwargs)
