"""Delta extraction for change proposals."""

from specdoc.deltas.extractor import (
    classify_operation,
    extract_deltas,
    extract_spec_deltas,
    scan_change_bullets,
)
from specdoc.deltas.models import Delta, DeltaBullet, DeltaOperation, delta_to_json

__all__ = [
    "Delta",
    "DeltaBullet",
    "DeltaOperation",
    "classify_operation",
    "delta_to_json",
    "extract_deltas",
    "extract_spec_deltas",
    "scan_change_bullets",
]
