"""Shared type definitions for apkbuild.

This module contains enums, dataclasses, and constants shared across
subpackages to avoid circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class TargetAbi(str, Enum):
    """Target CPU architecture for native code packaging.

    NONE means no single architecture was requested.
    """

    ARM = "armeabi-v7a"
    ARM64 = "arm64-v8a"
    X64 = "x86_64"
    NONE = ""

    @property
    def is_set(self) -> bool:
        return self is not TargetAbi.NONE


# Every ABI built when no single target is requested, in build order
ALL_ABIS: tuple[TargetAbi, ...] = (TargetAbi.ARM, TargetAbi.ARM64, TargetAbi.X64)


class PlayTrack(str, Enum):
    """Play Store release track."""

    BETA = "beta"
    PRODUCTION = "production"


class ModuleKind(str, Enum):
    """Kind of module whose shared build configuration is produced."""

    COMMON = "common"
    KOTLIN = "kotlin"
    NDK_LIBRARY = "ndk-library"
    CMAKE_LIBRARY = "cmake-library"
    APP_COMMON = "app-common"
    APP = "app"


@dataclass
class ReleaseMetadata:
    """Release metadata read from the project properties file."""

    package_name: str
    version_name: str
    version_code: int


@dataclass
class ChecksumResult:
    """Result of fingerprinting one build output."""

    output: Path
    checksum_file: Path
    sha256: str
    ci_env_lines: list[str] = field(default_factory=list)


__all__ = [
    "ALL_ABIS",
    "ChecksumResult",
    "ModuleKind",
    "PlayTrack",
    "ReleaseMetadata",
    "TargetAbi",
]
