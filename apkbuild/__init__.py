"""apkbuild - Shared build logic for Android application projects.

This package resolves build parameters from requested task names, produces
the shared Android build configuration, and fingerprints build outputs.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
