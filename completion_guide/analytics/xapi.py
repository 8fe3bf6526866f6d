"""xAPI statement emission for user interactions.

Statements are built by pure functions and sent to a Learning Record Store
by XapiClient. The scheduler never emits events itself; callers decide what
to report after observing results.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

import httpx
from loguru import logger

from completion_guide.config.settings import settings
from completion_guide.scheduling.types import WorkItem
from completion_guide.tasks.pool import task_label

VERBS: dict[str, dict[str, Any]] = {
    "selected": {
        "id": "http://id.tincanapi.com/verb/selected",
        "display": {"en-US": "selected"},
    },
    "discarded": {
        "id": "http://id.tincanapi.com/verb/discarded",
        "display": {"en-US": "discarded"},
    },
}

LESSON_TYPE = "http://adlnet.gov/expapi/activities/lesson"
INTERACTION_TYPE = "http://adlnet.gov/expapi/activities/interaction"


def build_actor(actor_id: str, base_url: str) -> dict[str, Any]:
    return {"account": {"homePage": base_url, "name": actor_id}}


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _ext(base_url: str, name: str) -> str:
    return f"{base_url}/xapi/ext/{name}"


def checkbox_statement(
    *,
    actor: dict[str, Any],
    base_url: str,
    week_number: int,
    day: str,
    task: WorkItem,
    checked: bool,
) -> dict[str, Any]:
    """Statement for a task being checked (selected) or unchecked (discarded)."""
    payload = task.payload
    extensions: dict[str, Any] = {
        _ext(base_url, "weekNumber"): week_number,
        _ext(base_url, "dayKey"): day,
        _ext(base_url, "taskId"): task.id,
    }
    for field in ("module", "unit", "page", "activity_type"):
        if field in payload:
            extensions[_ext(base_url, field)] = payload[field]

    return {
        "actor": actor,
        "verb": VERBS["selected" if checked else "discarded"],
        "object": {
            "id": f"{base_url}/xapi/task/{task.id}",
            "definition": {
                "name": {"en-US": task_label(task)},
                "type": LESSON_TYPE,
            },
        },
        "context": {
            "contextActivities": {
                "parent": [
                    {
                        "id": f"{base_url}/xapi/week/{week_number}/day/{day}",
                        "definition": {"name": {"en-US": f"Week {week_number} · {day}"}},
                    }
                ]
            },
            "extensions": extensions,
        },
        "timestamp": _now(),
    }


def _interaction_statement(
    *,
    actor: dict[str, Any],
    base_url: str,
    verb: str,
    path: str,
    name: str,
    extensions: dict[str, Any],
) -> dict[str, Any]:
    return {
        "actor": actor,
        "verb": VERBS[verb],
        "object": {
            "id": f"{base_url}/xapi/ui/{path}",
            "definition": {"name": {"en-US": name}, "type": INTERACTION_TYPE},
        },
        "context": {"extensions": {_ext(base_url, key): value for key, value in extensions.items()}},
        "timestamp": _now(),
    }


def completion_date_statement(*, actor: dict[str, Any], base_url: str, completion_date: str) -> dict[str, Any]:
    return _interaction_statement(
        actor=actor,
        base_url=base_url,
        verb="selected",
        path="completion-date",
        name="Desired Completion Date",
        extensions={"completionDate": completion_date},
    )


def day_selection_statement(*, actor: dict[str, Any], base_url: str, day: str, selected: bool) -> dict[str, Any]:
    return _interaction_statement(
        actor=actor,
        base_url=base_url,
        verb="selected" if selected else "discarded",
        path="schedule/day-selection",
        name="Schedule Time to Learn - Day Selection",
        extensions={"dayKey": day, "selected": selected},
    )


def minutes_statement(*, actor: dict[str, Any], base_url: str, day: str, minutes: float) -> dict[str, Any]:
    return _interaction_statement(
        actor=actor,
        base_url=base_url,
        verb="selected",
        path="schedule/minutes",
        name="Schedule Time to Learn - Minutes Set",
        extensions={"dayKey": day, "minutes": minutes},
    )


class XapiClient:
    """Sends statements to an LRS statements endpoint.

    With no endpoint configured the client is disabled and ``send`` is a
    no-op returning False.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        version: str | None = None,
        base_url: str | None = None,
        actor_id: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.endpoint = (endpoint if endpoint is not None else settings.xapi_endpoint).strip()
        self.version = version or settings.xapi_version
        self.base_url = (base_url or settings.xapi_base_url).rstrip("/")
        self.actor_id = actor_id or settings.actor_id or str(uuid.uuid4())
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self.endpoint)

    @property
    def actor(self) -> dict[str, Any]:
        return build_actor(self.actor_id, self.base_url)

    def send(self, statement: dict[str, Any]) -> bool:
        """PUT one statement under a fresh statement id.

        Returns:
            True if the LRS accepted the statement
        """
        if not self.enabled:
            return False

        params = {"statementId": str(uuid.uuid4())}
        headers = {"X-Experience-API-Version": self.version}
        try:
            if self._client is not None:
                response = self._client.put(self.endpoint, params=params, json=statement, headers=headers)
            else:
                with httpx.Client(timeout=10.0) as client:
                    response = client.put(self.endpoint, params=params, json=statement, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"[xAPI] LRS error {e.response.status_code}: {e.response.text or e.response.reason_phrase}")
            return False
        except httpx.RequestError as e:
            logger.error(f"[xAPI] Failed to send: {e}")
            return False

        logger.debug("[xAPI] Sent", verb=statement.get("verb", {}).get("display", {}).get("en-US"))
        return True
