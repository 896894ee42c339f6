from pathlib import Path

import pytest

from raidstat.executor import RunResult
from raidstat.grammar import MEGACLI_GRAMMAR

FIXTURES = Path(__file__).parent / "fixtures"

# MegaCli query flag -> fixture file prefix
_QUERIES = {
    "-LDInfo": "ldinfo",
    "-PDList": "pdlist",
    "-AdpGetPciInfo": "adpgetpciinfo",
}


def fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text()


def make_fixture_executor(overrides=None, calls=None):
    """
    Executor answering MegaCli queries from tests/fixtures.

    overrides maps (query flag, adapter flag) -> stdout, e.g.
    {("-PDList", "-a1"): "Exit Code: 0x01"}. Adapters without a fixture file
    reuse adapter 0's output. calls, when given, collects every command.
    """
    overrides = overrides or {}

    def executor(cmd, *, timeout=None):
        if calls is not None:
            calls.append(list(cmd))
        if "-adpCount" in cmd:
            return RunResult(stdout=fixture_text("adpcount.txt"), stderr="", returncode=2)
        adapter = next((c for c in cmd if c.startswith("-a")), "-a0")
        for flag, prefix in _QUERIES.items():
            if flag in cmd:
                if (flag, adapter) in overrides:
                    return RunResult(stdout=overrides[(flag, adapter)], stderr="", returncode=0)
                path = FIXTURES / f"{prefix}_{adapter[1:]}.txt"
                if not path.exists():
                    path = FIXTURES / f"{prefix}_a0.txt"
                return RunResult(stdout=path.read_text(), stderr="", returncode=0)
        return RunResult(stdout="", stderr="unknown command", returncode=1)
    return executor


@pytest.fixture
def fixture_executor():
    return make_fixture_executor()


@pytest.fixture
def by_path_grammar(tmp_path):
    """Grammar probing an empty by-path directory under tmp_path."""
    by_path = tmp_path / "by-path"
    by_path.mkdir()
    return MEGACLI_GRAMMAR.model_copy(update={"by_path_dir": str(by_path)})
