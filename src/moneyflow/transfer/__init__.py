"""Dataset transfer: full-ledger snapshot export and import."""

from moneyflow.transfer.schema import (
    SNAPSHOT_VERSION,
    SnapshotDocument,
    SnapshotCheck,
    validate_snapshot,
    validate_snapshot_json,
)
from moneyflow.transfer.exporter import SnapshotExporter
from moneyflow.transfer.importer import SnapshotImporter

__all__ = [
    "SNAPSHOT_VERSION",
    "SnapshotDocument",
    "SnapshotCheck",
    "validate_snapshot",
    "validate_snapshot_json",
    "SnapshotExporter",
    "SnapshotImporter",
]
