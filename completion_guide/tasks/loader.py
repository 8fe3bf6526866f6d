"""Task catalog loading.

The catalog is a JSON document with a top-level "Tasks" list, read from a
local file or fetched over HTTP. Each record's ``id`` and ``weight`` become
WorkItem fields; every other field is kept as opaque payload.
"""

import json
from pathlib import Path
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from completion_guide.core.errors import CatalogLoadError
from completion_guide.scheduling.types import WorkItem

_RESERVED_FIELDS = {"id", "weight", "status"}


def record_to_item(record: dict[str, Any]) -> WorkItem:
    """Convert one catalog record into an available WorkItem."""
    payload = {key: value for key, value in record.items() if key not in _RESERVED_FIELDS}
    return WorkItem(id=record["id"], weight=record["weight"], payload=payload)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_document(source: str, client: httpx.Client | None) -> Any:
    if _is_url(source):
        if client is not None:
            response = client.get(source)
            response.raise_for_status()
            return response.json()
        with httpx.Client(timeout=10.0) as owned_client:
            response = owned_client.get(source)
            response.raise_for_status()
            return response.json()

    return json.loads(Path(source).read_text(encoding="utf-8"))


def load_tasks_strict(source: str | Path, client: httpx.Client | None = None) -> list[WorkItem]:
    """Load the catalog, raising on any failure.

    Args:
        source: File path or http(s) URL of the catalog
        client: Optional httpx client (used for URLs only)

    Returns:
        Catalog items in document order; empty if the document has no "Tasks" key

    Raises:
        CatalogLoadError: If the document cannot be read, decoded or converted
    """
    source = str(source)
    try:
        document = _read_document(source, client)
    except (OSError, httpx.HTTPError, ValueError) as e:
        raise CatalogLoadError(f"Failed to load tasks from {source}: {e}") from e

    if not isinstance(document, dict):
        raise CatalogLoadError(f"Task catalog at {source} must be a JSON object")

    records = document.get("Tasks") or []
    if not isinstance(records, list):
        raise CatalogLoadError(f"'Tasks' in {source} must be a list")

    items = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise CatalogLoadError(f"Task record #{index} in {source} is not an object")
        try:
            items.append(record_to_item(record))
        except (KeyError, ValidationError) as e:
            raise CatalogLoadError(f"Task record #{index} in {source} is invalid: {e}") from e

    logger.info("Loaded task catalog", source=source, task_count=len(items))
    return items


def load_tasks(source: str | Path, client: httpx.Client | None = None) -> list[WorkItem]:
    """Load the catalog, logging failures and returning an empty list instead of raising."""
    try:
        return load_tasks_strict(source, client)
    except CatalogLoadError as e:
        logger.error(f"Error loading tasks: {e}")
        return []
