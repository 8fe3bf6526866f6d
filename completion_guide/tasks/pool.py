"""Task pool: the catalog partitioned by lifecycle status.

All transitions return a new pool; an id that is not in the expected group
leaves the pool unchanged.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from completion_guide.scheduling.types import WorkItem


class TaskPool(BaseModel):
    model_config = ConfigDict(frozen=True)

    available: tuple[WorkItem, ...] = ()
    assigned: tuple[WorkItem, ...] = ()
    completed: tuple[WorkItem, ...] = ()

    def ordered_items(self) -> list[WorkItem]:
        """Scheduling order: assigned items first, then available ones."""
        return [*self.assigned, *self.available]

    def total(self) -> int:
        return len(self.available) + len(self.assigned) + len(self.completed)


def initialize_task_pool(tasks: Iterable[WorkItem]) -> TaskPool:
    return TaskPool(available=tuple(task.with_status("available") for task in tasks))


def get_task_by_id(task_id: int, pool: TaskPool) -> WorkItem | None:
    for task in (*pool.available, *pool.assigned, *pool.completed):
        if task.id == task_id:
            return task
    return None


def move_task_to_completed(task_id: int, pool: TaskPool) -> TaskPool:
    task = next((t for t in pool.assigned if t.id == task_id), None)
    if task is None:
        return pool

    return TaskPool(
        available=pool.available,
        assigned=tuple(t for t in pool.assigned if t.id != task_id),
        completed=(*pool.completed, task.with_status("completed")),
    )


def move_task_from_completed_to_assigned(task_id: int, pool: TaskPool) -> TaskPool:
    task = next((t for t in pool.completed if t.id == task_id), None)
    if task is None:
        return pool

    return TaskPool(
        available=pool.available,
        assigned=(*pool.assigned, task.with_status("assigned")),
        completed=tuple(t for t in pool.completed if t.id != task_id),
    )


def task_label(task: WorkItem) -> str:
    """Display label such as "Module 2 · Unit 4 · Page 17 · read".

    Falls back to "Task <id>" when the payload carries none of the fields.
    """
    payload = task.payload
    parts = []
    if payload.get("module") is not None:
        parts.append(f"Module {payload['module']}")
    if payload.get("unit"):
        parts.append(str(payload["unit"]))
    if payload.get("page") not in (None, ""):
        parts.append(f"Page {payload['page']}")
    if payload.get("activity_type"):
        parts.append(str(payload["activity_type"]))
    return " · ".join(parts) if parts else f"Task {task.id}"
