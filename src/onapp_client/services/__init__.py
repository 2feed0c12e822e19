"""Resource services. Each wraps an explicitly passed OnAppClient."""

from .cloudboot_compute_resources import CloudbootComputeResourcesService
from .instance_packages import InstancePackagesService
from .transactions import TransactionsService
from .users import UsersService
from .virtual_machine_actions import VirtualMachineAction, VirtualMachineActionsService

__all__ = [
    "CloudbootComputeResourcesService",
    "InstancePackagesService",
    "TransactionsService",
    "UsersService",
    "VirtualMachineAction",
    "VirtualMachineActionsService",
]
