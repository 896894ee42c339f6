"""
Map RAID drives to kernel block devices through /dev/disk/by-path.

MegaCli never reports which /dev/sdX a drive became. udev names by-path links
after the controller's PCI address and the SCSI channel:target:lun the driver
exposed, so candidates are composed from the adapter's PCI address and the
drive id and probed until one exists. Nothing here raises: a miss is the
normal outcome for drives the OS cannot see, and yields OS_PATH_UNKNOWN.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .grammar import MEGACLI_GRAMMAR, Grammar
from .schema import OS_PATH_UNKNOWN

logger = logging.getLogger(__name__)


def candidate_path(grammar: Grammar, pci_address: str, channel: int, target: int) -> Path:
    return Path(grammar.by_path_dir) / f"pci-{pci_address}-scsi-0:{channel}:{target}:0"


def _resolve(candidate: Path) -> Optional[str]:
    """Real path behind candidate, or None when it is absent or dangling."""
    try:
        if not candidate.exists():
            return None
        return os.path.realpath(candidate)
    except OSError as e:
        logger.debug("cannot resolve %s: %s", candidate, e)
        return None


def resolve_virtual_drive(
    pci_address: Optional[str],
    vd_id: int,
    grammar: Grammar = MEGACLI_GRAMMAR,
) -> str:
    """
    First existing pci-<addr>-scsi-0:<channel>:<vd>:0 for channel in the
    grammar's range (1..7 for MegaCli; RAID volumes usually sit on channel 2).
    """
    if not pci_address:
        return OS_PATH_UNKNOWN
    for channel in range(grammar.vd_channel_first, grammar.vd_channel_last + 1):
        candidate = candidate_path(grammar, pci_address, channel, vd_id)
        real = _resolve(candidate)
        if real:
            logger.debug("virtual drive %d -> %s (%s)", vd_id, real, candidate.name)
            return real
    logger.debug("virtual drive %d: no by-path entry under %s", vd_id, grammar.by_path_dir)
    return OS_PATH_UNKNOWN


def resolve_physical_drive(
    pci_address: Optional[str],
    device_id: int,
    grammar: Grammar = MEGACLI_GRAMMAR,
) -> str:
    """pci-<addr>-scsi-0:<pd channel>:<device id>:0 for a JBOD disk."""
    if not pci_address:
        return OS_PATH_UNKNOWN
    candidate = candidate_path(grammar, pci_address, grammar.pd_channel, device_id)
    real = _resolve(candidate)
    if real:
        logger.debug("physical drive %d -> %s (%s)", device_id, real, candidate.name)
        return real
    logger.debug("physical drive %d: %s not present", device_id, candidate)
    return OS_PATH_UNKNOWN
