"""
Collectors turn MegaCli output into the records of the inventory snapshot.
Each collector receives an adapter id, an executor and the MegaCli path; the
orchestration here combines them per adapter and fills in by-path device paths.
"""

import logging
import re
import socket
from datetime import datetime, timezone
from typing import List, Optional

from ..by_path import resolve_physical_drive, resolve_virtual_drive
from ..errors import RaidstatError
from ..executor import DEFAULT_MEGACLI, Executor, make_executor, megacli_command
from ..grammar import MEGACLI_GRAMMAR, Grammar
from ..schema import AdapterRecord, InventorySnapshot

from .virtual_drives import QUERY as VD_QUERY, run as run_virtual_drives
from .physical_drives import QUERY as PD_QUERY, run as run_physical_drives
from .pci import run as run_pci

logger = logging.getLogger(__name__)

_ADAPTER_COUNT_RE = re.compile(r"Controller Count:\s*(\d+)")


def parse_adapter_count(text: str) -> Optional[int]:
    """Read "Controller Count: N." from -adpCount output."""
    m = _ADAPTER_COUNT_RE.search(text)
    return int(m.group(1)) if m else None


def detect_adapter_count(executor: Executor, megacli: str) -> int:
    # -adpCount reports the count as its exit code, so the trailer is not checked
    result = executor(megacli_command(megacli, "-adpCount"))
    count = parse_adapter_count(result.stdout)
    if count is None:
        raise RaidstatError(f"cannot read adapter count from {megacli}: {result.stderr.strip() or 'no Controller Count line'}")
    return count


def _query_error(adapter_id: int, query: str, e: RaidstatError) -> dict:
    return {
        "adapter_id": adapter_id,
        "query": f"{query} of adapter {adapter_id}",
        "message": str(e),
    }


def collect_adapter(
    adapter_id: int,
    executor: Executor,
    megacli: str = DEFAULT_MEGACLI,
    grammar: Grammar = MEGACLI_GRAMMAR,
    errors: Optional[List[dict]] = None,
) -> AdapterRecord:
    """
    Collect one adapter.

    Without an errors list a failed virtual or physical drive query raises.
    With one, the failure is appended to errors and only that kind is left
    empty. A failed PCI query only leaves every os_path unresolved.
    """
    results = {}
    kinds = (
        ("virtual_drives", VD_QUERY, run_virtual_drives),
        ("physical_drives", PD_QUERY, run_physical_drives),
    )
    for kind, query, run in kinds:
        try:
            results[kind] = run(adapter_id, executor, megacli, grammar)
        except RaidstatError as e:
            if errors is None:
                raise
            logger.error("adapter %d: %s", adapter_id, e)
            errors.append(_query_error(adapter_id, query, e))
            results[kind] = []
    virtual_drives = results["virtual_drives"]
    physical_drives = results["physical_drives"]

    try:
        pci_address = run_pci(adapter_id, executor, megacli, grammar)
    except RaidstatError as e:
        logger.warning("adapter %d: %s; device paths left unresolved", adapter_id, e)
        pci_address = None

    for vd in virtual_drives:
        vd.os_path = resolve_virtual_drive(pci_address, vd.virtual_drive, grammar)
    for pd in physical_drives:
        # only JBOD disks are visible to the OS on their own
        if pd.firmware_state == grammar.jbod_state:
            pd.os_path = resolve_physical_drive(pci_address, pd.device_id, grammar)

    return AdapterRecord(
        adapter_id=adapter_id,
        pci_address=pci_address,
        virtual_drives=virtual_drives,
        physical_drives=physical_drives,
    )


def run_all(
    executor: Optional[Executor] = None,
    megacli: str = DEFAULT_MEGACLI,
    adapter_count: Optional[int] = None,
    grammar: Grammar = MEGACLI_GRAMMAR,
) -> InventorySnapshot:
    """
    Collect every adapter and return a snapshot. A failed query is recorded
    in snapshot.errors and collection goes on with the next query.
    """
    if executor is None:
        executor = make_executor()
    if adapter_count is None:
        adapter_count = detect_adapter_count(executor, megacli)
        logger.info("detected %d adapter(s)", adapter_count)

    snapshot = InventorySnapshot(
        meta={
            "hostname": socket.gethostname(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "megacli": megacli,
            "adapter_count": adapter_count,
        },
    )
    for adapter_id in range(adapter_count):
        adapter = collect_adapter(adapter_id, executor, megacli, grammar, snapshot.errors)
        logger.info(
            "adapter %d: %d virtual drives, %d physical drives",
            adapter_id, len(adapter.virtual_drives), len(adapter.physical_drives),
        )
        snapshot.adapters.append(adapter)
    return snapshot
