"""
Command execution abstraction.

Collectors never call subprocess directly. They use the provided executor
so that tests can inject captured MegaCli output instead of running the binary.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_MEGACLI = "/opt/MegaRAID/MegaCli/MegaCli64"
DEFAULT_TIMEOUT = 300  # seconds per MegaCli command


@dataclass
class RunResult:
    """Result of running a command (or reading a fixture)."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    """Protocol for command execution. Implementations may run commands or read fixtures."""

    def __call__(self, cmd: List[str], *, timeout: Optional[int] = None) -> RunResult:
        """Execute command (or resolve to fixture). Returns stdout, stderr, returncode."""
        ...


def subprocess_executor(cmd: List[str], *, timeout: Optional[int] = None) -> RunResult:
    """Default implementation: run the command via subprocess."""
    import subprocess
    logger.debug("exec %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        )
        return RunResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )
    except subprocess.TimeoutExpired as e:
        return RunResult(
            stdout=e.stdout.decode() if e.stdout else "",
            stderr=f"Command timed out after {e.timeout}s",
            returncode=-1,
        )
    except FileNotFoundError:
        return RunResult(stdout="", stderr="Command not found", returncode=127)


def megacli_command(megacli: str, *args: str) -> List[str]:
    """Build a MegaCli argument vector; every query runs with -NoLog."""
    return [megacli, *args, "-NoLog"]


def make_executor(timeout: Optional[int] = None) -> Executor:
    """Create the default executor that runs commands with a fixed timeout."""
    def run(cmd: List[str], *, timeout: Optional[int] = timeout) -> RunResult:
        return subprocess_executor(cmd, timeout=timeout)
    return run
