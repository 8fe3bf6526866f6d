"""Tests for run state persistence."""

from datetime import date

from completion_guide.scheduling.advisories import ScheduleWarnings
from completion_guide.scheduling.greedy import pack
from completion_guide.state.store import RunState, StateStore, toggle_task


def _state(make_items) -> RunState:
    return RunState(
        selected_days=["M", "W"],
        minutes_per_day={"M": 60, "W": 45},
        completion_date=date(2026, 12, 1),
        submitted=True,
        weeks=pack(make_items([30, 30, 45]), ["M", "W"], {"M": 60, "W": 45}),
        checked_task_ids=[2],
        warnings=ScheduleWarnings(exceeded_date=True),
    )


def test_save_then_load_restores_schedule(tmp_path, make_items):
    store = StateStore(tmp_path / "nested" / "state.json")
    state = _state(make_items)

    assert store.save(state)
    loaded = store.load()

    assert loaded == state
    assert loaded.weeks[0].assignment_for("W").tasks[0].id == 3


def test_load_missing_file_returns_none(tmp_path):
    assert StateStore(tmp_path / "state.json").load() is None


def test_load_corrupt_file_returns_none(tmp_path):
    path = tmp_path / "state.json"
    path.write_text('{"weeks": "nope"', encoding="utf-8")

    assert StateStore(path).load() is None


def test_save_failure_returns_false(tmp_path, make_items):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    assert StateStore(blocker / "state.json").save(_state(make_items)) is False


def test_clear_removes_file(tmp_path, make_items):
    store = StateStore(tmp_path / "state.json")
    store.save(_state(make_items))

    store.clear()
    store.clear()

    assert store.load() is None


def test_toggle_task_checks_and_unchecks(make_items):
    state = _state(make_items)

    checked = toggle_task(state, 1)
    unchecked = toggle_task(checked, 2)

    assert checked.checked_task_ids == [1, 2]
    assert unchecked.checked_task_ids == [1]
    assert state.checked_task_ids == [2]
