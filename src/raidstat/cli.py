"""Command line arguments."""

import argparse
from pathlib import Path
from typing import List, Optional

from .executor import DEFAULT_MEGACLI, DEFAULT_TIMEOUT


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return n


def _positive_int(value: str) -> int:
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0: {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raidstat",
        description="Inventory MegaRAID virtual and physical drives and map them to block devices.",
    )
    parser.add_argument(
        "--megacli",
        default=DEFAULT_MEGACLI,
        help=f"MegaCli binary (default: {DEFAULT_MEGACLI})",
    )
    parser.add_argument(
        "--adapter-count",
        type=_non_negative_int,
        default=None,
        help="Number of adapters to query (default: ask MegaCli -adpCount)",
    )
    parser.add_argument(
        "--grammar",
        type=Path,
        default=None,
        help="JSON file overriding the MegaCli output grammar",
    )
    parser.add_argument(
        "--by-path-dir",
        type=Path,
        default=None,
        help="Directory of by-path device links (default: /dev/disk/by-path)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "summary"),
        default="json",
        help="What to print on stdout (default: json)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Also write the JSON snapshot and summary.txt into this directory",
    )
    parser.add_argument(
        "--from-snapshot",
        type=Path,
        default=None,
        help="Render a previously saved snapshot instead of querying MegaCli",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=DEFAULT_TIMEOUT,
        help=f"Seconds to wait for each MegaCli command (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
    )
    parser.add_argument("--log-file", default=None)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
