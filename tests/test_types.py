"""Tests for shared type definitions."""

from pathlib import Path

from apkbuild.types import (
    ALL_ABIS,
    ChecksumResult,
    ModuleKind,
    PlayTrack,
    ReleaseMetadata,
    TargetAbi,
)


class TestTargetAbi:
    """Test TargetAbi enum."""

    def test_values(self) -> None:
        assert TargetAbi.ARM.value == "armeabi-v7a"
        assert TargetAbi.ARM64.value == "arm64-v8a"
        assert TargetAbi.X64.value == "x86_64"
        assert TargetAbi.NONE.value == ""

    def test_is_set(self) -> None:
        assert TargetAbi.ARM64.is_set is True
        assert TargetAbi.NONE.is_set is False

    def test_all_abis_order(self) -> None:
        assert [a.value for a in ALL_ABIS] == ["armeabi-v7a", "arm64-v8a", "x86_64"]


class TestEnums:
    """Test remaining enums."""

    def test_play_track_is_string(self) -> None:
        assert PlayTrack.BETA == "beta"

    def test_module_kind_from_value(self) -> None:
        assert ModuleKind("cmake-library") is ModuleKind.CMAKE_LIBRARY


class TestDataclasses:
    """Test shared dataclasses."""

    def test_release_metadata(self) -> None:
        metadata = ReleaseMetadata("a.b", "1.0", 3)
        assert metadata.version_code == 3

    def test_checksum_result_defaults(self) -> None:
        result = ChecksumResult(
            output=Path("a.apk"), checksum_file=Path("a.sha256sum.txt"), sha256="0"
        )
        assert result.ci_env_lines == []
