"""Async client for the OnApp cloud-management REST API."""

from .client import ListOptions, OnAppClient
from .errors import (
    OnAppAPIError,
    OnAppArgumentError,
    OnAppAuthError,
    OnAppError,
    OnAppNotFoundError,
    OnAppTransportError,
    OnAppValidationError,
    TransactionLookupError,
)
from .services import (
    CloudbootComputeResourcesService,
    InstancePackagesService,
    TransactionsService,
    UsersService,
    VirtualMachineAction,
    VirtualMachineActionsService,
)
from .settings import OnAppSettings

__all__ = [
    "CloudbootComputeResourcesService",
    "InstancePackagesService",
    "ListOptions",
    "OnAppAPIError",
    "OnAppArgumentError",
    "OnAppAuthError",
    "OnAppClient",
    "OnAppError",
    "OnAppNotFoundError",
    "OnAppSettings",
    "OnAppTransportError",
    "OnAppValidationError",
    "TransactionLookupError",
    "TransactionsService",
    "UsersService",
    "VirtualMachineAction",
    "VirtualMachineActionsService",
]
