"""
MegaCli text grammar.

Every sentinel, marker and field key the parsers rely on lives here, so that a
different MegaCli (or StorCli-compatible) release can be described by a JSON
file instead of code changes. Parsers receive a Grammar explicitly; the module
level MEGACLI_GRAMMAR is the default for MegaCli64 8.x.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class FieldKind(str, Enum):
    STRING = "string"
    INT = "int"
    UINT64 = "uint64"


class MatchMode(str, Enum):
    PREFIX = "prefix"
    CONTAINS = "contains"


class FieldKey(BaseModel):
    """One recognised line of a record block."""

    key: str
    kind: FieldKind = FieldKind.STRING
    match: MatchMode = MatchMode.PREFIX

    def matches(self, line: str) -> bool:
        if self.match == MatchMode.CONTAINS:
            return self.key in line
        return line.startswith(self.key)


def _vd_fields() -> Dict[str, FieldKey]:
    # keys are VirtualDriveRecord attribute names
    return {
        "virtual_drive": FieldKey(key="Virtual Drive", kind=FieldKind.INT),
        "name": FieldKey(key="Name"),
        "size": FieldKey(key="Size"),
        "state": FieldKey(key="State"),
        "number_of_drives": FieldKey(key="Number Of Drives", kind=FieldKind.INT),
        "encryption_type": FieldKey(key="Encryption Type"),
    }


def _pd_fields() -> Dict[str, FieldKey]:
    # keys are PhysicalDriveRecord attribute names, except the two composite
    # fields (inquiry, disk_group) which fan out to several attributes
    return {
        "enclosure_device_id": FieldKey(key="Enclosure Device ID", kind=FieldKind.INT),
        "device_id": FieldKey(key="Device Id", kind=FieldKind.INT),
        "slot_number": FieldKey(key="Slot Number", kind=FieldKind.INT),
        "media_error_count": FieldKey(key="Media Error Count", kind=FieldKind.INT),
        "other_error_count": FieldKey(key="Other Error Count", kind=FieldKind.INT),
        "predictive_failure_count": FieldKey(key="Predictive Failure Count", kind=FieldKind.INT),
        "media_type": FieldKey(key="Media Type"),
        "pd_type": FieldKey(key="PD Type"),
        "raw_size": FieldKey(key="Raw Size"),
        "firmware_state": FieldKey(key="Firmware state"),
        "inquiry": FieldKey(key="Inquiry Data"),
        "disk_group": FieldKey(key="DiskGroup", match=MatchMode.CONTAINS),
        "drive_temperature": FieldKey(key="Drive Temperature"),
    }


class Grammar(BaseModel):
    """Block delimiters and field vocabulary for one MegaCli output dialect."""

    # record segmentation
    vd_sentinel: str = "Virtual Drive:"
    vd_marker: str = "Target Id"
    pd_sentinel: str = "Enclosure Device ID:"
    pd_marker: str = "Slot Number"

    # response trailer
    exit_token: str = "Exit Code:"
    success_code: str = "0x00"

    # integer fields the hardware cannot report
    na_literal: str = "N/A"
    na_sentinel: int = 999

    vd_fields: Dict[str, FieldKey] = Field(default_factory=_vd_fields)
    pd_fields: Dict[str, FieldKey] = Field(default_factory=_pd_fields)

    # -AdpGetPciInfo labels
    pci_domain: str = "0000"
    pci_bus_label: str = "Bus Number"
    pci_device_label: str = "Device Number"
    pci_function_label: str = "Function Number"

    # seagate drives prefix the model with an 8 character id token
    inquiry_pattern: str = r"(\w{8})(ST\w+)(?:-(\w{6}))?(?:\s+(\w+))"
    disk_group_pattern: str = r"DiskGroup:\s*(\w+)\s*,\s*Span:\s*(\w+)\s*,\s*Arm:\s*(\w+)"
    jbod_state: str = "JBOD"

    # /dev/disk/by-path probing
    by_path_dir: str = "/dev/disk/by-path"
    vd_channel_first: int = 1
    vd_channel_last: int = 7
    pd_channel: int = 0

    model_config = {"extra": "forbid"}

    @field_validator("inquiry_pattern", "disk_group_pattern")
    @classmethod
    def _compiles(cls, v: str) -> str:
        # both patterns are read through groups 1 to 3
        try:
            groups = re.compile(v).groups
        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}") from e
        if groups < 3:
            raise ValueError(f"needs at least 3 groups, has {groups}")
        return v

    @property
    def raw_size_key(self) -> Optional[str]:
        field = self.pd_fields.get("raw_size")
        return field.key if field else None


MEGACLI_GRAMMAR = Grammar()


def load_grammar(path: Path) -> Grammar:
    """Load a grammar from JSON. Omitted keys keep their MegaCli64 defaults."""
    return Grammar.model_validate_json(Path(path).read_text())
