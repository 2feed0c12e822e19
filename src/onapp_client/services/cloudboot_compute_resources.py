"""CloudBoot compute resources (hypervisors booted over PXE).

New compute resources are created from *assets*: servers that have
network-booted and registered with the control panel but are not yet
configured. ``available_resources()`` lists them; ``create()`` turns one
into a compute resource, addressed by its MAC address.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

from ..client import (
    API_FORMAT,
    ListOptions,
    OnAppClient,
    encode_params,
    require_id,
    require_payload,
)
from ..models import (
    Asset,
    CloudbootComputeResource,
    CloudbootComputeResourceCreateRequest,
    CloudbootComputeResourceEditRequest,
)
from ..errors import OnAppArgumentError
from .envelope import unwrap, unwrap_list, wrap

logger = logging.getLogger(__name__)

HYPERVISORS_BASE_PATH = "settings/hypervisors"
CLOUDBOOT_ASSETS_BASE_PATH = "settings/assets"


def _asset_mac(
    create_request: CloudbootComputeResourceCreateRequest | Mapping[str, Any],
) -> str:
    """MAC address of the asset being configured; it is part of the URL."""
    if isinstance(create_request, CloudbootComputeResourceCreateRequest):
        mac = create_request.mac
    else:
        mac = create_request.get("mac")
    if not isinstance(mac, str) or not mac.strip():
        raise OnAppArgumentError("create_request.mac", "cannot be empty")
    return mac.strip()


class CloudbootComputeResourcesService:
    RESOURCE_KEY = "hypervisor"
    ASSET_KEY = "asset"

    def __init__(self, client: OnAppClient) -> None:
        self._client = client

    async def list(
        self, options: ListOptions | None = None
    ) -> list[CloudbootComputeResource]:
        payload = await self._client.request(
            "GET",
            HYPERVISORS_BASE_PATH + API_FORMAT,
            params=encode_params(options),
        )
        return unwrap_list(payload, self.RESOURCE_KEY, CloudbootComputeResource)

    async def get(self, resource_id: int) -> CloudbootComputeResource:
        require_id(resource_id)
        payload = await self._client.request(
            "GET", f"{HYPERVISORS_BASE_PATH}/{resource_id}{API_FORMAT}"
        )
        return unwrap(payload, self.RESOURCE_KEY, CloudbootComputeResource)

    async def create(
        self,
        create_request: CloudbootComputeResourceCreateRequest | Mapping[str, Any],
    ) -> CloudbootComputeResource:
        require_payload(create_request, "create_request", allow_empty=False)
        mac = _asset_mac(create_request)
        payload = await self._client.request(
            "POST",
            f"{CLOUDBOOT_ASSETS_BASE_PATH}/{quote(mac, safe=':')}/hypervisors{API_FORMAT}",
            json=wrap(self.RESOURCE_KEY, create_request),
        )
        resource = unwrap(payload, self.RESOURCE_KEY, CloudbootComputeResource)
        logger.info(
            "CloudBoot compute resource created: id=%s mac=%s",
            resource.id,
            mac,
            extra={"compute_resource_id": resource.id},
        )
        return resource

    async def delete(
        self,
        resource_id: int,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        require_id(resource_id)
        await self._client.request(
            "DELETE",
            f"{HYPERVISORS_BASE_PATH}/{resource_id}{API_FORMAT}",
            params=encode_params(meta),
        )
        logger.info(
            "CloudBoot compute resource deleted: id=%d",
            resource_id,
            extra={"compute_resource_id": resource_id},
        )

    async def edit(
        self,
        resource_id: int,
        edit_request: CloudbootComputeResourceEditRequest,
    ) -> None:
        """Update a compute resource. The body is sent without an envelope."""
        require_id(resource_id)
        require_payload(edit_request, "edit_request")
        await self._client.request(
            "PUT",
            f"{HYPERVISORS_BASE_PATH}/{resource_id}{API_FORMAT}",
            json=edit_request.to_payload(),
        )
        logger.info(
            "CloudBoot compute resource edited: id=%d",
            resource_id,
            extra={"compute_resource_id": resource_id},
        )

    async def available_resources(self) -> list[Asset]:
        """List CloudBoot assets not yet configured as compute resources."""
        payload = await self._client.request(
            "GET", CLOUDBOOT_ASSETS_BASE_PATH + API_FORMAT
        )
        return unwrap_list(payload, self.ASSET_KEY, Asset)
