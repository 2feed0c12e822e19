"""Typed records and payloads for the OnApp API."""

from .common import OnAppRecord, OnAppRequest
from .compute_resource import (
    Asset,
    CloudbootComputeResource,
    CloudbootComputeResourceCreateRequest,
    CloudbootComputeResourceEditRequest,
    Storage,
    StorageCustomPci,
    StorageDisk,
    StorageNic,
)
from .instance_package import InstancePackage, InstancePackageCreateRequest
from .transaction import Transaction
from .user import (
    AdditionalField,
    Infoboxes,
    IPAddress,
    Permission,
    Permissions,
    Role,
    Roles,
    User,
    UserCreateRequest,
    UserEditRequest,
)

__all__ = [
    "AdditionalField",
    "Asset",
    "CloudbootComputeResource",
    "CloudbootComputeResourceCreateRequest",
    "CloudbootComputeResourceEditRequest",
    "IPAddress",
    "Infoboxes",
    "InstancePackage",
    "InstancePackageCreateRequest",
    "OnAppRecord",
    "OnAppRequest",
    "Permission",
    "Permissions",
    "Role",
    "Roles",
    "Storage",
    "StorageCustomPci",
    "StorageDisk",
    "StorageNic",
    "Transaction",
    "User",
    "UserCreateRequest",
    "UserEditRequest",
]
