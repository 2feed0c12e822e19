"""Instance packages: preset CPU/memory/disk/bandwidth bundles."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..client import (
    API_FORMAT,
    ListOptions,
    OnAppClient,
    encode_params,
    require_id,
    require_payload,
)
from ..models import InstancePackage, InstancePackageCreateRequest, Transaction
from .envelope import unwrap, unwrap_list, wrap
from .transactions import TransactionsService

logger = logging.getLogger(__name__)

INSTANCE_PACKAGES_BASE_PATH = "instance_packages"
INSTANCE_PACKAGE_OBJECT_TYPE = "InstancePackage"


class InstancePackagesService:
    RESOURCE_KEY = "instance_package"

    def __init__(
        self,
        client: OnAppClient,
        transactions: TransactionsService | None = None,
    ) -> None:
        self._client = client
        self._transactions = transactions or TransactionsService(client)

    async def list(self, options: ListOptions | None = None) -> list[InstancePackage]:
        payload = await self._client.request(
            "GET",
            INSTANCE_PACKAGES_BASE_PATH + API_FORMAT,
            params=encode_params(options),
        )
        return unwrap_list(payload, self.RESOURCE_KEY, InstancePackage)

    async def get(self, package_id: int) -> InstancePackage:
        require_id(package_id)
        payload = await self._client.request(
            "GET", f"{INSTANCE_PACKAGES_BASE_PATH}/{package_id}{API_FORMAT}"
        )
        return unwrap(payload, self.RESOURCE_KEY, InstancePackage)

    async def create(
        self,
        create_request: InstancePackageCreateRequest | Mapping[str, Any],
    ) -> InstancePackage:
        require_payload(create_request, "create_request", allow_empty=False)
        payload = await self._client.request(
            "POST",
            INSTANCE_PACKAGES_BASE_PATH + API_FORMAT,
            json=wrap(self.RESOURCE_KEY, create_request),
        )
        package = unwrap(payload, self.RESOURCE_KEY, InstancePackage)
        logger.info(
            "Instance package created: id=%s label=%s",
            package.id,
            package.label,
            extra={"instance_package_id": package.id},
        )
        return package

    async def delete(
        self,
        package_id: int,
        meta: Mapping[str, Any] | None = None,
    ) -> Transaction | None:
        """Delete a package and return the newest transaction it spawned.

        Like virtual machine actions, the returned transaction is a
        best-effort match on parent id and type.
        """
        require_id(package_id)
        await self._client.request(
            "DELETE",
            f"{INSTANCE_PACKAGES_BASE_PATH}/{package_id}{API_FORMAT}",
            params=encode_params(meta),
        )
        logger.info(
            "Instance package deleted: id=%d",
            package_id,
            extra={"instance_package_id": package_id},
        )

        filters = {
            "parent_id": package_id,
            "parent_type": INSTANCE_PACKAGE_OBJECT_TYPE,
        }
        return await self._transactions.last_transaction(
            filters,
            resource_id=package_id,
            action="delete",
        )
