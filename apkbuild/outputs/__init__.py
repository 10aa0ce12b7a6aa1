"""Build output handling.

This module handles:
- Output file renaming
- Checksum generation and CI export
"""

from apkbuild.outputs.checksums import calculate_checksums, fingerprint, write_checksum
from apkbuild.outputs.naming import rename_app, rename_common

__all__ = [
    "calculate_checksums",
    "fingerprint",
    "rename_app",
    "rename_common",
    "write_checksum",
]
