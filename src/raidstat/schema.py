"""
Inventory snapshot schema.

Strongly typed contract between collectors and renderers.
All collectors produce records that fit into this schema; all renderers consume it.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# os_path value when no by-path entry could be resolved
OS_PATH_UNKNOWN = "N/A"


# --- Virtual drives (-LDInfo -Lall) ---


class VirtualDriveRecord(BaseModel):
    """One logical volume of an adapter."""

    virtual_drive: int  # unique within the adapter
    name: str = ""
    size: str = ""
    state: str = ""
    number_of_drives: int
    encryption_type: str = ""
    os_path: str = OS_PATH_UNKNOWN

    model_config = {"extra": "forbid"}


# --- Physical drives (-PDList) ---


class PhysicalDriveRecord(BaseModel):
    """One disk attached to an adapter."""

    enclosure_device_id: int  # 999 when the enclosure reports N/A
    device_id: int
    slot_number: int
    media_error_count: int
    other_error_count: int
    predictive_failure_count: int
    media_type: str = ""
    pd_type: str = ""
    disk_group: str = ""
    arm: str = ""
    raw_size: str = ""  # sector count annotation stripped
    firmware_state: str = ""
    brand: str = ""
    model: str = ""
    serial_number: str = ""
    drive_temperature: str = ""
    os_path: str = OS_PATH_UNKNOWN

    model_config = {"extra": "forbid"}


# --- Adapter ---


class AdapterRecord(BaseModel):
    """Everything collected for one controller in one pass."""

    adapter_id: int
    pci_address: Optional[str] = None  # e.g. 0000:03:00.0
    virtual_drives: List[VirtualDriveRecord] = Field(default_factory=list)
    physical_drives: List[PhysicalDriveRecord] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


# --- Root snapshot ---


class InventorySnapshot(BaseModel):
    """
    Full inventory snapshot. Serialized as raidstat-snapshot.json.
    Every failed query is listed in errors; its adapter keeps the kinds that succeeded.
    """

    meta: dict = Field(default_factory=dict)  # hostname, timestamp, megacli
    adapters: List[AdapterRecord] = Field(default_factory=list)
    errors: List[dict] = Field(default_factory=list)  # {adapter_id, query, message}

    model_config = {"extra": "forbid"}
