"""summary.txt renderer: one line per virtual and physical drive, grouped by adapter."""

from pathlib import Path

from jinja2 import Environment

from ..schema import InventorySnapshot

SUMMARY_FILENAME = "summary.txt"

SUMMARY_TEMPLATE = """\
{% for adapter in snapshot.adapters %}
Adapter {{ adapter.adapter_id }} (PCI {{ adapter.pci_address or "unknown" }})
{% for vd in adapter.virtual_drives %}
VD-{{ vd.virtual_drive }}: status: {{ vd.state }}, size: {{ vd.size }}, NumberOfDrives: {{ vd.number_of_drives }}, OsPath: {{ vd.os_path }}
{% endfor %}

{% for pd in adapter.physical_drives %}
PD-{{ loop.index0 }}: {{ [pd.brand, pd.model, pd.serial_number] | join(" ") }}, Size: {{ pd.raw_size }}, status: {{ pd.firmware_state }}, PdType: {{ pd.pd_type }} {{ pd.media_type | initials }}, DiskGroup: {{ pd.disk_group ~ "-" ~ pd.arm if (pd.disk_group or pd.arm) else "null" }}, OsPath: {{ pd.os_path }}
{% endfor %}

{% endfor %}
{% for err in snapshot.errors %}
Adapter {{ err.adapter_id }} FAILED: {{ err.message }}
{% endfor %}
"""


def render_text(snapshot: InventorySnapshot, env: Environment) -> str:
    return env.from_string(SUMMARY_TEMPLATE).render(snapshot=snapshot)


def render(
    snapshot: InventorySnapshot,
    env: Environment,
    output_dir: Path,
) -> None:
    output_dir = Path(output_dir)
    (output_dir / SUMMARY_FILENAME).write_text(render_text(snapshot, env))
