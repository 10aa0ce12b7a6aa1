"""Shared Android build configuration module.

This module handles:
- Configuration models for modules
- Per-kind setup (common, Kotlin, native libraries, applications)
- Signing and Play publishing
- YAML/JSON export
"""

from apkbuild.android.schema import AndroidConfigSchema

__all__ = ["AndroidConfigSchema"]

# Access setup functions via apkbuild.android.configure
