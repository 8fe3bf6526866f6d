"""Root conftest for all tests.

Shared factories for work items.
"""

from collections.abc import Callable, Iterable

import pytest

from completion_guide.scheduling.types import WorkItem


@pytest.fixture
def make_items() -> Callable[..., list[WorkItem]]:
    """Build items with ids start_id..start_id+n-1 from a list of weights."""

    def _make(weights: Iterable[float], start_id: int = 1) -> list[WorkItem]:
        return [
            WorkItem(id=start_id + i, weight=w, payload={"module": 1, "page": str(start_id + i)})
            for i, w in enumerate(weights)
        ]

    return _make
