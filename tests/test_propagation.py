import pytest

from eq_editor.filters import FilterSet, LowShelfFilter, PeakingFilter
from eq_editor.interaction import HandleKind
from eq_editor.propagation import DragSession, Throttle, reconcile
from eq_editor.scales import frequency_scale, gain_scale

X_SCALE = frequency_scale(1000.0)
Y_SCALE = gain_scale(500.0)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_throttle_runs_leading_call_and_drops_the_rest():
    clock = FakeClock()
    calls = []
    throttle = Throttle(calls.append, interval=0.05, clock=clock)

    for t, value in ((0.0, "a"), (0.010, "b"), (0.020, "c")):
        clock.now = t
        throttle(value)
    assert calls == ["a"]
    assert throttle.in_window

    clock.now = 0.05
    assert not throttle.in_window
    assert throttle("d") is True
    clock.now = 0.07
    assert throttle("e") is False
    assert calls == ["a", "d"]


def test_throttle_flush_ignores_window():
    clock = FakeClock()
    calls = []
    throttle = Throttle(calls.append, interval=0.05, clock=clock)
    throttle("a")
    throttle.flush("final")
    assert calls == ["a", "final"]


def test_throttle_reset_closes_window():
    clock = FakeClock()
    calls = []
    throttle = Throttle(calls.append, interval=1.0, clock=clock)
    throttle(1)
    throttle.reset()
    throttle(2)
    assert calls == [1, 2]


def test_negative_interval_is_rejected():
    with pytest.raises(ValueError):
        Throttle(print, interval=-1.0)


def test_reconcile_copies_working_filter():
    committed = FilterSet([PeakingFilter(id=1, hz=1000.0), LowShelfFilter(id=2, hz=100.0)])
    working = committed.copy()
    working.replace(PeakingFilter(id=1, hz=3000.0))
    result = reconcile(committed, working, 1)
    assert result == PeakingFilter(id=1, hz=3000.0)
    assert committed.get(1) == result
    assert committed.get(2) == LowShelfFilter(id=2, hz=100.0)


def test_drag_session_throttles_commits_and_forces_final_write():
    clock = FakeClock()
    committed = FilterSet([PeakingFilter(id=1, hz=1000.0, db=0.0, q=1.0)], selected_id=1)
    commits = []
    session = DragSession(committed, 1, commit=commits.append, interval=0.05, clock=clock)

    for t, gain in ((0.0, 2.0), (0.010, 4.0), (0.020, 6.0)):
        clock.now = t
        session.update(HandleKind.MAIN, (X_SCALE(1000.0), Y_SCALE(gain)), X_SCALE, Y_SCALE)

    assert session.filter.db == pytest.approx(6.0)
    assert committed.get(1).db == pytest.approx(2.0)
    assert [filt.db for filt in commits] == pytest.approx([2.0])

    clock.now = 0.030
    final = session.end()
    assert final.db == pytest.approx(6.0)
    assert committed.get(1) == final
    assert [filt.db for filt in commits] == pytest.approx([2.0, 6.0])


def test_drag_session_writes_again_after_window():
    clock = FakeClock()
    committed = FilterSet([PeakingFilter(id=1, hz=1000.0, q=2.0)])
    session = DragSession(committed, 1, interval=0.05, clock=clock)

    session.update(HandleKind.Q_RIGHT, (X_SCALE(2000.0), 0.0), X_SCALE, Y_SCALE)
    clock.now = 0.02
    session.update(HandleKind.Q_RIGHT, (X_SCALE(3000.0), 0.0), X_SCALE, Y_SCALE)
    assert committed.get(1).q == pytest.approx(1.0)

    clock.now = 0.06
    session.update(HandleKind.Q_RIGHT, (X_SCALE(5000.0), 0.0), X_SCALE, Y_SCALE)
    assert committed.get(1).q == pytest.approx(0.25)


def test_working_copy_leaves_other_filters_alone():
    committed = FilterSet([PeakingFilter(id=1, hz=1000.0), LowShelfFilter(id=2, hz=100.0, db=3.0)])
    session = DragSession(committed, 2, clock=FakeClock())
    session.update(HandleKind.MAIN, (X_SCALE(200.0), Y_SCALE(1.0)), X_SCALE, Y_SCALE)
    assert session.working is not committed
    assert session.working.get(1) is committed.get(1)
    session.end()
    assert committed.get(2).hz == pytest.approx(200.0)
    assert committed.get(2).db == pytest.approx(2.0)


def test_drag_session_cannot_be_reused():
    committed = FilterSet([PeakingFilter(id=1)])
    session = DragSession(committed, 1, clock=FakeClock())
    session.end()
    with pytest.raises(RuntimeError):
        session.end()
    with pytest.raises(RuntimeError):
        session.update(HandleKind.MAIN, (0.0, 0.0), X_SCALE, Y_SCALE)


def test_drag_session_requires_known_filter():
    with pytest.raises(KeyError):
        DragSession(FilterSet([PeakingFilter(id=1)]), 42)
