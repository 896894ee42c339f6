"""Snapshot persistence: write the collected inventory as JSON and read it back for re-rendering."""

from pathlib import Path

from .schema import InventorySnapshot

SNAPSHOT_FILENAME = "raidstat-snapshot.json"


def save_snapshot(snapshot: InventorySnapshot, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(snapshot.model_dump_json(indent=2))


def load_snapshot(path: Path) -> InventorySnapshot:
    return InventorySnapshot.model_validate_json(Path(path).read_text())
