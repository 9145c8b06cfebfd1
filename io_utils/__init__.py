from .read import read_checklist, compute_sha256
from .write import write_checklist, write_manifest, read_manifest, write_table
from .logs import setup_logging

__all__ = [
    "read_checklist",
    "compute_sha256",
    "write_checklist",
    "write_manifest",
    "read_manifest",
    "write_table",
    "setup_logging",
]
