"""Course-Harvester: parallel course content ingestion."""

__version__ = "0.1.0"
