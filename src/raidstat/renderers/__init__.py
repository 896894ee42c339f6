"""
Renderers turn an inventory snapshot into output artifacts.
All renderers share one jinja2 Environment carrying the filters below.
"""

from pathlib import Path

from jinja2 import Environment

from ..pipeline import SNAPSHOT_FILENAME, save_snapshot
from ..schema import InventorySnapshot
from .summary import render as render_summary


def initials(text: str) -> str:
    """Keep the uppercase letters: "Hard Disk Device" -> "HDD"."""
    return "".join(c for c in text if c.isupper())


def make_environment() -> Environment:
    env = Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
    env.filters["initials"] = initials
    return env


def run_all(snapshot: InventorySnapshot, output_dir: Path) -> None:
    """Write the JSON snapshot and every rendered artifact into output_dir."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    save_snapshot(snapshot, output_dir / SNAPSHOT_FILENAME)
    render_summary(snapshot, make_environment(), output_dir)
