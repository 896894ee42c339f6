"""
Physical drive collector: MegaCli -PDList, one record per disk.

Besides plain Key: Value fields, two lines need their own grammar:
"Inquiry Data" is unstructured vendor identity text that is split into
brand/model/serial, and "Drive's position" packs disk group, span and arm
into one comma separated value.
"""

import logging
import re
from typing import List, Tuple

from ..errors import FieldParseError
from ..executor import Executor, megacli_command
from ..fields import parse_field
from ..grammar import MEGACLI_GRAMMAR, FieldKey, Grammar
from ..schema import PhysicalDriveRecord
from ..segmenter import split_blocks, split_exit_result
from .blocks import dispatch_table, int_setter, parse_block, string_setter

logger = logging.getLogger(__name__)

QUERY = "physical drives"

UNKNOWN_SERIAL = "unknown"

# every numeric field; disk_group is absent for JBOD and unconfigured disks
REQUIRED = (
    "enclosure_device_id",
    "device_id",
    "slot_number",
    "media_error_count",
    "other_error_count",
    "predictive_failure_count",
)


def split_inquiry(inquiry: str, grammar: Grammar = MEGACLI_GRAMMAR) -> Tuple[str, str, str]:
    """
    Split an Inquiry Data string into (brand, model, serial).

    Seagate SATA drives print "<8 char id>ST<model>[-<suffix>] <rev>"; those
    keep the whole normalized string as model. Everything else is split on
    whitespace as "<brand> <model...> <firmware rev> <serial>". This is a
    heuristic tuned on LSI output and never raises.
    """
    text = " ".join(inquiry.split())
    m = re.search(grammar.inquiry_pattern, text)
    if m:
        serial = m.group(2)
        if m.group(3):
            serial = f"{serial}-{m.group(3)}"
        return m.group(1), text, serial

    tokens = text.split()
    if not tokens:
        return "", "", UNKNOWN_SERIAL
    if len(tokens) == 1:
        return tokens[0], "", UNKNOWN_SERIAL
    if len(tokens) == 2:
        return tokens[0], "", tokens[1]
    if len(tokens) == 3:
        return tokens[0], tokens[1], tokens[2]
    # second to last token is the firmware revision
    return tokens[0], " ".join(tokens[1:-2]), tokens[-1]


def _set_inquiry(values: dict, line: str, field: FieldKey, grammar: Grammar) -> None:
    inquiry = parse_field(line, field.kind, field.key, grammar).as_str()
    values["brand"], values["model"], values["serial_number"] = split_inquiry(inquiry, grammar)


def _set_disk_group(values: dict, line: str, field: FieldKey, grammar: Grammar) -> None:
    # "Drive's position: DiskGroup: 0, Span: 0, Arm: 1"; span is not kept
    m = re.search(grammar.disk_group_pattern, line)
    if not m:
        raise FieldParseError(field.key, line, "DiskGroup/Span/Arm triple")
    values["disk_group"] = m.group(1)
    values["arm"] = m.group(3)


_HANDLERS = {
    "enclosure_device_id": int_setter("enclosure_device_id"),
    "device_id": int_setter("device_id"),
    "slot_number": int_setter("slot_number"),
    "media_error_count": int_setter("media_error_count"),
    "other_error_count": int_setter("other_error_count"),
    "predictive_failure_count": int_setter("predictive_failure_count"),
    "media_type": string_setter("media_type"),
    "pd_type": string_setter("pd_type"),
    "raw_size": string_setter("raw_size"),
    "firmware_state": string_setter("firmware_state"),
    "inquiry": _set_inquiry,
    "disk_group": _set_disk_group,
    "drive_temperature": string_setter("drive_temperature"),
}


def parse_physical_drives(text: str, grammar: Grammar = MEGACLI_GRAMMAR) -> List[PhysicalDriveRecord]:
    """Build one PhysicalDriveRecord per "Enclosure Device ID:" block of text."""
    table = dispatch_table(grammar.pd_fields, _HANDLERS)
    records = []
    for block in split_blocks(text, grammar.pd_sentinel, grammar.pd_marker):
        records.append(PhysicalDriveRecord(**parse_block(block, table, grammar, REQUIRED, grammar.pd_fields)))
    return records


def run(
    adapter_id: int,
    executor: Executor,
    megacli: str,
    grammar: Grammar = MEGACLI_GRAMMAR,
) -> List[PhysicalDriveRecord]:
    result = executor(megacli_command(megacli, "-PDList", f"-a{adapter_id}"))
    body = split_exit_result(result.stdout, f"{QUERY} of adapter {adapter_id}", grammar)
    records = parse_physical_drives(body, grammar)
    logger.debug("adapter %d: %d physical drives", adapter_id, len(records))
    return records
