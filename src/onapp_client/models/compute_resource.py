"""CloudBoot compute resource (hypervisor) records and payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import OnAppRecord, OnAppRequest


class Asset(OnAppRecord):
    """A CloudBoot-discovered server that can become a compute resource."""

    mac: str | None = None
    ip: str | None = None


class StorageDisk(OnAppRequest):
    scsi: str
    selected: bool = False


class StorageNic(OnAppRequest):
    mac: str
    type: int | None = None


class StorageCustomPci(OnAppRequest):
    pci: str
    selected: bool = False


class Storage(OnAppRequest):
    """Integrated storage layout for a CloudBoot compute resource."""

    disks: list[StorageDisk] | None = None
    nics: list[StorageNic] | None = None
    custom_pcis: list[StorageCustomPci] | None = None


class CloudbootComputeResource(OnAppRecord):
    id: int | None = None
    label: str | None = None
    ip_address: str | None = None
    mac: str | None = None
    hypervisor_type: str | None = None
    hypervisor_group_id: int | None = None
    server_type: str | None = None
    segregation_os_type: str | None = None
    cloud_boot_os: str | None = None
    online: bool | None = None
    enabled: bool | None = None
    locked: bool | None = None
    built: bool | None = None
    spare: bool | None = None
    backup: bool | None = None
    backup_ip_address: str | None = None
    collect_stats: bool | None = None
    disable_failover: bool | None = None
    format_disks: bool | None = None
    passthrough_disks: bool | None = None
    static_integrated_storage: bool | None = None
    integrated_storage_disabled: bool | None = None
    storage_controller_memory_size: int | None = None
    disks_per_storage_controller: int | None = None
    custom_config: str | None = None
    cpus: int | None = None
    cpu_cores: int | None = None
    cpu_mhz: int | None = None
    cpu_units: int | None = None
    total_memory: int | None = None
    free_memory: int | None = None
    max_vms: int | None = None
    host: str | None = None
    host_id: int | None = None
    called_in_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CloudbootComputeResourceCreateRequest(OnAppRequest):
    """Payload for turning a discovered asset into a compute resource.

    ``mac`` selects the asset and is also part of the request URL.
    """

    mac: str = Field(min_length=1)
    label: str | None = None
    pxe_ip_address_id: int | None = None
    hypervisor_type: str | None = None
    hypervisor_group_id: int | None = None
    segregation_os_type: str | None = None
    server_type: str | None = None
    backup: bool | None = None
    backup_ip_address: str | None = None
    enabled: bool | None = None
    collect_stats: bool | None = None
    disable_failover: bool | None = None
    format_disks: bool | None = None
    passthrough_disks: bool | None = None
    storage: Storage | None = None
    storage_controller_memory_size: int | None = None
    static_integrated_storage: bool | None = None
    disks_per_storage_controller: int | None = None
    cloud_boot_os: str | None = None
    custom_config: str | None = None
    default_gateway: str | None = None
    vlan: str | None = None


class CloudbootComputeResourceEditRequest(OnAppRequest):
    collect_stats: bool | None = None
    disable_failover: bool | None = None
    passthrough_disks: bool | None = None
    storage: Storage | None = None
    storage_controller_memory_size: int | None = None
    static_integrated_storage: bool | None = None
    disks_per_storage_controller: int | None = None
    integrated_storage_disabled: bool | None = None
    custom_config: str | None = None
    apply_hypervisor_group_custom_config: bool | None = None
