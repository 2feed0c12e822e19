from __future__ import annotations

from pydantic import Field

from .common import OnAppRecord, OnAppRequest


class InstancePackage(OnAppRecord):
    id: int | None = None
    label: str | None = None
    cpus: int | None = None
    memory: int | None = None
    disk_size: int | None = None
    bandwidth: int | None = None
    billing_plan_ids: list[int] = Field(default_factory=list)
    buckets_ids: list[int] = Field(default_factory=list)
    openstack_id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class InstancePackageCreateRequest(OnAppRequest):
    """Payload for creating an instance package (memory in MB, disk in GB)."""

    label: str = Field(min_length=1)
    cpus: int | None = None
    memory: int | None = None
    disk_size: int | None = None
    bandwidth: int | None = None
