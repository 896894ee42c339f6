"""
Tests verifying every CLI flag is parsed and wired through to behavior.
"""

import json
import unittest.mock
from pathlib import Path

import pytest

from raidstat.cli import parse_args
from raidstat.schema import InventorySnapshot


def test_defaults():
    args = parse_args([])
    assert args.megacli == "/opt/MegaRAID/MegaCli/MegaCli64"
    assert args.adapter_count is None
    assert args.grammar is None
    assert args.by_path_dir is None
    assert args.format == "json"
    assert args.output_dir is None
    assert args.from_snapshot is None
    assert args.timeout == 300
    assert args.log_level == "WARNING"
    assert args.log_file is None


def test_all_flags_set():
    args = parse_args([
        "--megacli", "/usr/sbin/megacli",
        "--adapter-count", "2",
        "--grammar", "/etc/raidstat/grammar.json",
        "--by-path-dir", "/tmp/by-path",
        "--format", "summary",
        "--output-dir", "/tmp/out",
        "--from-snapshot", "/tmp/snap.json",
        "--timeout", "30",
        "--log-level", "DEBUG",
        "--log-file", "/tmp/raidstat.log",
    ])
    assert args.megacli == "/usr/sbin/megacli"
    assert args.adapter_count == 2
    assert args.grammar == Path("/etc/raidstat/grammar.json")
    assert args.by_path_dir == Path("/tmp/by-path")
    assert args.format == "summary"
    assert args.output_dir == Path("/tmp/out")
    assert args.from_snapshot == Path("/tmp/snap.json")
    assert args.timeout == 30
    assert args.log_level == "DEBUG"
    assert args.log_file == "/tmp/raidstat.log"


def test_collection_flags_reach_run_all(tmp_path):
    """--megacli, --adapter-count and --by-path-dir are passed through __main__._collect to run_all."""
    args = parse_args([
        "--megacli", "/usr/sbin/megacli",
        "--adapter-count", "3",
        "--by-path-dir", str(tmp_path),
    ])
    with unittest.mock.patch("raidstat.__main__.run_all") as mock_run_all:
        mock_run_all.return_value = InventorySnapshot()
        from raidstat.__main__ import _collect
        _collect(args)
        mock_run_all.assert_called_once()
        kwargs = mock_run_all.call_args.kwargs
        assert kwargs["megacli"] == "/usr/sbin/megacli"
        assert kwargs["adapter_count"] == 3
        assert kwargs["grammar"].by_path_dir == str(tmp_path)


def test_grammar_file_is_loaded(tmp_path):
    grammar_file = tmp_path / "grammar.json"
    grammar_file.write_text(json.dumps({"success_code": "0x0", "pd_channel": 1}))
    args = parse_args(["--grammar", str(grammar_file)])
    from raidstat.__main__ import _load_grammar
    grammar = _load_grammar(args)
    assert grammar.success_code == "0x0"
    assert grammar.pd_channel == 1
    assert grammar.vd_sentinel == "Virtual Drive:"


def test_main_exit_status_reflects_errors(capsys):
    failed = InventorySnapshot(errors=[{"adapter_id": 0, "query": "", "message": "boom"}])
    with unittest.mock.patch("raidstat.__main__.run_all", return_value=failed):
        from raidstat.__main__ import main
        assert main(["--adapter-count", "1"]) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["errors"][0]["message"] == "boom"

    with unittest.mock.patch("raidstat.__main__.run_all", return_value=InventorySnapshot()):
        assert main(["--adapter-count", "1", "--format", "summary"]) == 0


def test_timeout_must_be_positive(capsys):
    for value in ("0", "-5"):
        with pytest.raises(SystemExit):
            parse_args(["--timeout", value])
    assert "must be > 0" in capsys.readouterr().err


def test_executor_keeps_explicit_timeout():
    from raidstat.executor import DEFAULT_TIMEOUT, subprocess_executor
    with unittest.mock.patch("subprocess.run") as mock_run:
        mock_run.return_value = unittest.mock.Mock(stdout="Exit Code: 0x00\n", stderr="", returncode=0)
        subprocess_executor(["MegaCli64", "-adpCount"], timeout=5)
        assert mock_run.call_args.kwargs["timeout"] == 5
        subprocess_executor(["MegaCli64", "-adpCount"])
        assert mock_run.call_args.kwargs["timeout"] == DEFAULT_TIMEOUT


@pytest.mark.parametrize("patterns", [
    {"inquiry_pattern": "(unclosed"},
    {"disk_group_pattern": r"DiskGroup:\s*(\w+)"},
])
def test_bad_grammar_pattern_exits_2(tmp_path, patterns):
    grammar_file = tmp_path / "grammar.json"
    grammar_file.write_text(json.dumps(patterns))
    from raidstat.__main__ import main
    with unittest.mock.patch("raidstat.__main__.run_all") as mock_run_all:
        assert main(["--grammar", str(grammar_file), "--adapter-count", "1"]) == 2
        mock_run_all.assert_not_called()
