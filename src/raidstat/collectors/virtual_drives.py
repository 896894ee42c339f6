"""Virtual drive collector: MegaCli -LDInfo -Lall, one record per logical volume."""

import logging
from typing import List

from ..errors import FieldFormatError
from ..executor import Executor, megacli_command
from ..fields import parse_field
from ..grammar import MEGACLI_GRAMMAR, FieldKey, Grammar
from ..schema import VirtualDriveRecord
from ..segmenter import split_blocks, split_exit_result
from .blocks import dispatch_table, int_setter, parse_block, string_setter

logger = logging.getLogger(__name__)

QUERY = "virtual drives"

# a record without these lines is never built
REQUIRED = ("virtual_drive", "number_of_drives")


def _set_virtual_drive(values: dict, line: str, field: FieldKey, grammar: Grammar) -> None:
    # "Virtual Drive: 0 (Target Id: 0)": the id is what precedes the parenthesis
    head, paren, _ = line.partition("(")
    if not paren:
        raise FieldFormatError(line)
    values["virtual_drive"] = parse_field(head, field.kind, field.key, grammar).as_int()


_HANDLERS = {
    "virtual_drive": _set_virtual_drive,
    "name": string_setter("name"),
    "size": string_setter("size"),
    "state": string_setter("state"),
    "number_of_drives": int_setter("number_of_drives"),
    "encryption_type": string_setter("encryption_type"),
}


def parse_virtual_drives(text: str, grammar: Grammar = MEGACLI_GRAMMAR) -> List[VirtualDriveRecord]:
    """Build one VirtualDriveRecord per "Virtual Drive:" block of text."""
    table = dispatch_table(grammar.vd_fields, _HANDLERS)
    records = []
    for block in split_blocks(text, grammar.vd_sentinel, grammar.vd_marker):
        records.append(VirtualDriveRecord(**parse_block(block, table, grammar, REQUIRED, grammar.vd_fields)))
    return records


def run(
    adapter_id: int,
    executor: Executor,
    megacli: str,
    grammar: Grammar = MEGACLI_GRAMMAR,
) -> List[VirtualDriveRecord]:
    result = executor(megacli_command(megacli, "-LDInfo", "-Lall", f"-a{adapter_id}"))
    body = split_exit_result(result.stdout, f"{QUERY} of adapter {adapter_id}", grammar)
    records = parse_virtual_drives(body, grammar)
    logger.debug("adapter %d: %d virtual drives", adapter_id, len(records))
    return records
