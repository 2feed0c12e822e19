"""Transaction (background job) records."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .common import OnAppRecord


class Transaction(OnAppRecord):
    """Server-side job record. The client only ever reads these.

    ``associated_object_*`` names the resource the job acts on (e.g. a
    VirtualMachine); ``parent_*`` names the resource that spawned it.
    """

    id: int | None = None
    identifier: str | None = None
    action: str | None = None
    status: str | None = None
    associated_object_id: int | None = None
    associated_object_type: str | None = None
    parent_id: int | None = None
    parent_type: str | None = None
    chain_id: int | None = None
    dependent_transaction_id: int | None = None
    priority: int | None = None
    pid: int | None = None
    actor: str | None = None
    allowed_cancel: bool | None = None
    params: Any = None
    log_output: str | None = None
    user_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def matches(self, filters: dict[str, Any]) -> bool:
        """True if every filter field equals the record's value."""
        return all(getattr(self, key, None) == value for key, value in filters.items())
