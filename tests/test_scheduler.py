import pytest

from catdefense.scheduler import RepeatingTimer, Scheduler


def test_callbacks_run_in_due_order():
    sched = Scheduler()
    seen = []
    sched.call_later(30, lambda: seen.append("a"))
    sched.call_later(10, lambda: seen.append("b"))
    sched.call_later(20, lambda: seen.append("c"))
    sched.advance(30)
    assert seen == ["b", "c", "a"]


def test_equal_due_times_keep_insertion_order():
    sched = Scheduler()
    seen = []
    for label in "xyz":
        sched.call_later(5, lambda label=label: seen.append(label))
    sched.advance(5)
    assert seen == ["x", "y", "z"]


def test_not_run_before_due():
    sched = Scheduler()
    seen = []
    sched.call_later(100, lambda: seen.append(1))
    sched.advance(99)
    assert seen == []
    sched.advance(1)
    assert seen == [1]


def test_clock_moves_by_total():
    sched = Scheduler()
    sched.advance(100)
    sched.advance(150)
    assert sched.now == 100 + 150


def test_clock_is_at_due_time_inside_callback():
    sched = Scheduler()
    times = []
    sched.call_later(40, lambda: times.append(sched.now))
    sched.advance(1000)
    assert times == [40]


def test_cancel_owner_only_affects_that_owner():
    sched = Scheduler()
    seen = []
    first, second = object(), object()
    sched.call_later(10, lambda: seen.append("first"), first)
    sched.call_later(10, lambda: seen.append("second"), second)
    assert sched.cancel_owner(first) == 1
    sched.advance(10)
    assert seen == ["second"]
    assert len(sched) == 0


def test_callback_scheduled_inside_window_runs():
    sched = Scheduler()
    seen = []
    sched.call_later(10, lambda: sched.call_later(10, lambda: seen.append("inner")))
    sched.advance(20)
    assert seen == ["inner"]


def test_negative_values_rejected():
    sched = Scheduler()
    with pytest.raises(ValueError):
        sched.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        sched.advance(-5)


def test_repeating_timer_fires_each_interval():
    sched = Scheduler()
    count = []
    timer = RepeatingTimer(sched, lambda: count.append(sched.now))
    timer.start(30)
    sched.advance(100)
    assert len(count) == 3
    assert all(b - a == 30 for a, b in zip(count, count[1:]))
    assert timer.active


def test_repeating_timer_stop():
    sched = Scheduler()
    count = []
    timer = RepeatingTimer(sched, lambda: count.append(1))
    timer.start(10)
    sched.advance(10)
    timer.stop()
    sched.advance(100)
    assert count == [1]
    assert not timer.active


def test_restart_resets_phase():
    sched = Scheduler()
    count = []
    timer = RepeatingTimer(sched, lambda: count.append(1))
    timer.start(50)
    sched.advance(40)
    timer.start(50)
    sched.advance(40)
    assert count == []


def test_timer_can_stop_itself():
    sched = Scheduler()
    times = []

    def tick():
        times.append(sched.now)
        timer.stop()

    timer = RepeatingTimer(sched, tick)
    timer.start(10)
    sched.advance(100)
    assert times == [10]
    assert not timer.active
    assert len(sched) == 0
    assert sched.now == 100


def test_timer_rejects_non_positive_interval():
    timer = RepeatingTimer(Scheduler(), lambda: None)
    with pytest.raises(ValueError):
        timer.start(0)