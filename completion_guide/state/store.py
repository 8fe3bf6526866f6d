"""Persisted run state.

A run state is the snapshot a user resumes from: the calendar inputs, the
generated weeks, checked task ids and the last warnings. It is stored as a
single JSON file.
"""

from datetime import date
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from completion_guide.scheduling.advisories import ScheduleWarnings
from completion_guide.scheduling.types import WeekSchedule


class RunState(BaseModel):
    """Snapshot of a planning session.

    Attributes:
        selected_days: Days selected for the initial schedule
        minutes_per_day: Minutes per selected day
        completion_date: Target completion date
        submitted: Whether a schedule has been generated
        weeks: Current schedule
        checked_task_ids: Ids of tasks marked completed
        warnings: Warnings of the last generation
    """

    selected_days: list[str] = Field(default_factory=list)
    minutes_per_day: dict[str, float] = Field(default_factory=dict)
    completion_date: date | None = None
    submitted: bool = False
    weeks: list[WeekSchedule] = Field(default_factory=list)
    checked_task_ids: list[int] = Field(default_factory=list)
    warnings: ScheduleWarnings = Field(default_factory=ScheduleWarnings)


def toggle_task(state: RunState, task_id: int) -> RunState:
    """Return a new state with ``task_id`` checked if it was not, unchecked otherwise."""
    checked = set(state.checked_task_ids)
    if task_id in checked:
        checked.remove(task_id)
    else:
        checked.add(task_id)
    return state.model_copy(update={"checked_task_ids": sorted(checked)})


class StateStore:
    """JSON file store for RunState."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> RunState | None:
        """Load the stored state.

        Returns:
            The stored state, or None when nothing is stored or it cannot be read
        """
        if not self.path.exists():
            return None
        try:
            return RunState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.error(f"Failed to load state from {self.path}: {e}")
            return None

    def save(self, state: RunState) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save state to {self.path}: {e}")
            return False
        logger.debug("Saved run state", path=str(self.path), weeks=len(state.weeks))
        return True

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
