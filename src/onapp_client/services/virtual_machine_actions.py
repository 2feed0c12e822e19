"""Virtual machine power and lock actions.

Each action is a fire-and-forget POST. The API answers before the job
behind it has an id, so after a successful POST we look up the newest
transaction tagged with the action's label for that virtual machine and
return it as a handle on the asynchronous result.

Known limitation: concurrent actions on the same virtual machine can
return each other's transactions. If the action POST fails, no lookup is
made. If the lookup fails, TransactionLookupError is raised and the action
has already been accepted; do not retry it blindly.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import assert_never

from ..client import API_FORMAT, OnAppClient, require_id
from ..errors import OnAppArgumentError
from ..models import Transaction
from .transactions import TransactionsService

logger = logging.getLogger(__name__)

VIRTUAL_MACHINES_BASE_PATH = "virtual_machines"
VIRTUAL_MACHINE_OBJECT_TYPE = "VirtualMachine"


class VirtualMachineAction(str, Enum):
    """Lifecycle actions accepted by /virtual_machines/{id}/{path}."""

    SHUTDOWN = "shutdown"
    STOP = "stop"
    STARTUP = "startup"
    UNLOCK = "unlock"
    REBOOT = "reboot"
    SUSPEND = "suspend"
    UNSUSPEND = "unsuspend"

    @property
    def path(self) -> str:
        """URL segment the action is posted to."""
        match self:
            case VirtualMachineAction.UNSUSPEND:
                # Unsuspend is the suspend toggle with a direction field.
                return VirtualMachineAction.SUSPEND.value
            case (
                VirtualMachineAction.SHUTDOWN
                | VirtualMachineAction.STOP
                | VirtualMachineAction.STARTUP
                | VirtualMachineAction.UNLOCK
                | VirtualMachineAction.REBOOT
                | VirtualMachineAction.SUSPEND
            ):
                return self.value
            case _:
                assert_never(self)

    @property
    def body(self) -> dict[str, str]:
        body = {"type": self.value}
        if self.path != self.value:
            body["path"] = self.path
        return body

    @property
    def transaction_label(self) -> str:
        """Action label the server puts on the resulting transaction."""
        match self:
            case (
                VirtualMachineAction.SHUTDOWN
                | VirtualMachineAction.STOP
                | VirtualMachineAction.SUSPEND
            ):
                return "stop_virtual_server"
            case VirtualMachineAction.STARTUP | VirtualMachineAction.UNSUSPEND:
                return "startup_virtual_server"
            case VirtualMachineAction.REBOOT:
                return "reboot_virtual_server"
            case VirtualMachineAction.UNLOCK:
                return "unlock_virtual_server"
            case _:
                assert_never(self)


def virtual_machine_action_path(vm_id: int, action: VirtualMachineAction) -> str:
    return f"{VIRTUAL_MACHINES_BASE_PATH}/{vm_id}/{action.path}{API_FORMAT}"


class VirtualMachineActionsService:
    """Issues lifecycle actions and correlates them with transactions."""

    def __init__(
        self,
        client: OnAppClient,
        transactions: TransactionsService | None = None,
    ) -> None:
        self._client = client
        self._transactions = transactions or TransactionsService(client)

    async def perform_action(
        self,
        vm_id: int,
        action: VirtualMachineAction | str,
    ) -> Transaction | None:
        """Post ``action`` for ``vm_id`` and return its latest transaction.

        Returns None if the server accepted the action but no matching
        transaction is visible yet.
        """
        require_id(vm_id)
        try:
            action = VirtualMachineAction(action)
        except ValueError:
            raise OnAppArgumentError("action", f"unknown action {action!r}") from None

        await self._client.request(
            "POST",
            virtual_machine_action_path(vm_id, action),
            json=action.body,
        )
        logger.info(
            "Virtual machine action accepted: %s on %d",
            action.value,
            vm_id,
            extra={"vm_id": vm_id, "action": action.value},
        )

        filters = {
            "action": action.transaction_label,
            "associated_object_id": vm_id,
            "associated_object_type": VIRTUAL_MACHINE_OBJECT_TYPE,
        }
        return await self._transactions.last_transaction(
            filters,
            resource_id=vm_id,
            action=action.value,
        )

    async def shutdown(self, vm_id: int) -> Transaction | None:
        """Shut a virtual machine down gracefully."""
        return await self.perform_action(vm_id, VirtualMachineAction.SHUTDOWN)

    async def stop(self, vm_id: int) -> Transaction | None:
        """Power a virtual machine off forcefully."""
        return await self.perform_action(vm_id, VirtualMachineAction.STOP)

    async def startup(self, vm_id: int) -> Transaction | None:
        return await self.perform_action(vm_id, VirtualMachineAction.STARTUP)

    async def unlock(self, vm_id: int) -> Transaction | None:
        return await self.perform_action(vm_id, VirtualMachineAction.UNLOCK)

    async def reboot(self, vm_id: int) -> Transaction | None:
        return await self.perform_action(vm_id, VirtualMachineAction.REBOOT)

    async def suspend(self, vm_id: int) -> Transaction | None:
        return await self.perform_action(vm_id, VirtualMachineAction.SUSPEND)

    async def unsuspend(self, vm_id: int) -> Transaction | None:
        return await self.perform_action(vm_id, VirtualMachineAction.UNSUSPEND)
