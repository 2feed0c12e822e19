"""User records, with their nested role and permission envelopes.

Roles and permissions arrive wrapped the same way list responses are:
``"roles": [{"role": {..., "permissions": [{"permission": {...}}]}}]``.
The wrapper models keep that shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .common import OnAppRecord, OnAppRequest


class Infoboxes(OnAppRecord):
    display_infoboxes: bool | None = None
    hidden_infoboxes: list[str] = Field(default_factory=list)


class Permission(OnAppRecord):
    id: int | None = None
    identifier: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Permissions(OnAppRecord):
    permission: Permission


class Role(OnAppRecord):
    id: int | None = None
    identifier: str | None = None
    label: str | None = None
    system: bool | None = None
    users_count: int | None = None
    permissions: list[Permissions] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Roles(OnAppRecord):
    role: Role


class AdditionalField(OnAppRecord):
    """A custom user field; sent back as-is in create and edit payloads."""

    name: str
    value: Any = None


class IPAddress(OnAppRecord):
    id: int | None = None
    address: str | None = None
    gateway: str | None = None
    netmask: str | None = None
    network_id: int | None = None
    ip_range_id: int | None = None
    free: bool | None = None


class User(OnAppRecord):
    id: int | None = None
    login: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    identifier: str | None = None
    status: str | None = None
    locale: str | None = None
    time_zone: str | None = None
    system_theme: str | None = None
    avatar: Any = None
    use_gravatar: bool | None = None
    supplied: bool | None = None
    registered_yubikey: bool | None = None
    cdn_status: str | None = None
    cdn_account_status: str | None = None
    billing_plan_id: int | None = None
    bucket_id: int | None = None
    firewall_id: int | None = None
    group_id: int | None = None
    user_group_id: int | None = None
    image_template_group_id: int | None = None
    infoboxes: Infoboxes | None = None
    roles: list[Roles] = Field(default_factory=list)
    additional_fields: list[AdditionalField] = Field(default_factory=list)
    used_ip_addresses: list[IPAddress] = Field(default_factory=list)
    used_cpus: int | None = None
    used_memory: int | None = None
    used_cpu_shares: int | None = None
    used_disk_size: int | None = None
    memory_available: int | None = None
    disk_space_available: int | None = None
    monthly_price: float | None = None
    payment_amount: float | None = None
    outstanding_amount: float | None = None
    total_amount: float | None = None
    discount_due_to_free: float | None = None
    total_amount_with_discount: float | None = None
    activated_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    password_changed_at: datetime | None = None
    suspend_at: datetime | None = None

    @property
    def role_labels(self) -> list[str]:
        return [r.role.label for r in self.roles if r.role.label]


class UserCreateRequest(OnAppRequest):
    login: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    user_group_id: int | None = None
    billing_plan_id: int | None = None
    role_ids: list[int] | None = None
    additional_fields: list[AdditionalField] | None = None


class UserEditRequest(OnAppRequest):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    password: str | None = None
    user_group_id: int | None = None
    billing_plan_id: int | None = None
    role_ids: list[int] | None = None
    time_zone: str | None = None
    locale: str | None = None
    additional_fields: list[AdditionalField] | None = None
