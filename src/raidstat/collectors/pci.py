"""Adapter PCI address: MegaCli -AdpGetPciInfo."""

import logging
import re
from typing import Optional

from ..executor import Executor, megacli_command
from ..grammar import MEGACLI_GRAMMAR, Grammar
from ..segmenter import split_exit_result

logger = logging.getLogger(__name__)

QUERY = "PCI info"


def _label_re(label: str):
    return re.compile(rf"^{re.escape(label)}.*:\s*(\S*)\s*$")


def parse_pci_address(text: str, grammar: Grammar = MEGACLI_GRAMMAR) -> Optional[str]:
    """
    Extract "<domain>:<bus>:<device>.<function>" from -AdpGetPciInfo output.

    The three labels may appear in any order. Returns None when no Bus Number
    line is present; callers treat that as "address unknown".
    """
    bus_re = _label_re(grammar.pci_bus_label)
    device_re = _label_re(grammar.pci_device_label)
    function_re = _label_re(grammar.pci_function_label)
    bus = device = function = None

    for line in text.splitlines():
        line = line.strip()
        m = bus_re.match(line)
        if m:
            bus = m.group(1).zfill(2)
            continue
        m = device_re.match(line)
        if m:
            device = m.group(1).zfill(2)
            continue
        m = function_re.match(line)
        if m:
            function = m.group(1).zfill(1)

    if not bus:
        return None
    return f"{grammar.pci_domain}:{bus}:{device or '00'}.{function or '0'}"


def run(
    adapter_id: int,
    executor: Executor,
    megacli: str,
    grammar: Grammar = MEGACLI_GRAMMAR,
) -> Optional[str]:
    result = executor(megacli_command(megacli, "-AdpGetPciInfo", f"-a{adapter_id}"))
    body = split_exit_result(result.stdout, f"{QUERY} of adapter {adapter_id}", grammar)
    address = parse_pci_address(body, grammar)
    logger.debug("adapter %d: PCI address %s", adapter_id, address)
    return address
