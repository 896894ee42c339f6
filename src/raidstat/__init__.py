"""raidstat: MegaRAID adapter inventory from MegaCli output."""

__version__ = "0.1.0"
