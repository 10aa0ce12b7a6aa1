"""Tests for build parameter resolution."""

import pytest

from apkbuild.context import (
    BuildContext,
    is_release_flavor,
    resolve_flavor,
    resolve_target_abi,
)
from apkbuild.types import TargetAbi


class TestResolveFlavor:
    """Tests for resolve_flavor function."""

    def test_empty_tasks(self) -> None:
        """No requested tasks should give an empty flavor."""
        assert resolve_flavor([]) == ""

    @pytest.mark.parametrize(
        ("task", "expected"),
        [
            ("assembleFooRelease", "FooRelease"),
            ("assembleOssRelease", "OssRelease"),
            (":app:assemblePlayDebug", "PlayDebug"),
            ("assemble", ""),
        ],
    )
    def test_assemble(self, task: str, expected: str) -> None:
        """Flavor is the text after 'assemble'."""
        assert resolve_flavor([task]) == expected

    def test_install(self) -> None:
        """Flavor is the text after 'install'."""
        assert resolve_flavor(["installOssDebug"]) == "OssDebug"

    def test_publish_strips_bundle(self) -> None:
        """Publish tasks drop the Bundle suffix."""
        assert resolve_flavor(["publishFooReleaseBundle"]) == "FooRelease"
        assert resolve_flavor(["publishPlayReleaseBundle"]) == "PlayRelease"

    def test_publish_without_bundle(self) -> None:
        """Publish tasks without Bundle keep the whole suffix."""
        assert resolve_flavor(["publishPlayReleaseApk"]) == "PlayReleaseApk"

    def test_assemble_checked_before_install(self) -> None:
        """'assemble' wins when both verbs appear."""
        assert resolve_flavor(["installThenassembleX"]) == "X"

    def test_only_first_task_inspected(self) -> None:
        """Later tasks never influence the flavor."""
        assert resolve_flavor(["clean", "assembleOssRelease"]) == ""
        assert resolve_flavor(["assembleOssRelease", "installPlayDebug"]) == (
            "OssRelease"
        )

    def test_unknown_verb(self) -> None:
        """Tasks without a known verb give an empty flavor."""
        assert resolve_flavor(["lint"]) == ""


class TestResolveTargetAbi:
    """Tests for resolve_target_abi function."""

    def test_arm64_wins_over_arm(self) -> None:
        """A task naming arm64 is never classified as 32-bit arm."""
        assert resolve_target_abi(["assembleOssArm64Release"]) == TargetAbi.ARM64
        assert resolve_target_abi(["arm-and-arm64"]) == TargetAbi.ARM64

    def test_arm(self) -> None:
        assert resolve_target_abi(["assembleOssArmRelease"]) == TargetAbi.ARM

    def test_x64(self) -> None:
        assert resolve_target_abi(["assembleX64"]) == TargetAbi.X64

    def test_case_insensitive_and_trimmed(self) -> None:
        """Matching ignores case and surrounding whitespace."""
        assert resolve_target_abi(["  ASSEMBLEARM64  "]) == TargetAbi.ARM64

    def test_no_match(self) -> None:
        assert resolve_target_abi(["assembleOssRelease"]) == TargetAbi.NONE

    def test_requires_exactly_one_task(self) -> None:
        """Zero or several tasks never select an ABI."""
        assert resolve_target_abi([]) == TargetAbi.NONE
        assert resolve_target_abi(["assembleArm64", "clean"]) == TargetAbi.NONE


class TestIsReleaseFlavor:
    """Tests for is_release_flavor function."""

    @pytest.mark.parametrize(
        "flavor", ["OssRelease", "ExpertRelease", "PlayRelease", "PlayReleaseApk"]
    )
    def test_release(self, flavor: str) -> None:
        assert is_release_flavor(flavor) is True

    @pytest.mark.parametrize("flavor", ["", "OssDebug", "FooRelease", "ossRelease"])
    def test_not_release(self, flavor: str) -> None:
        assert is_release_flavor(flavor) is False


class TestBuildContext:
    """Tests for BuildContext."""

    def test_from_tasks_none(self) -> None:
        ctx = BuildContext.from_tasks(None)
        assert ctx.task_names == ()
        assert ctx.flavor == ""
        assert ctx.target_abi == TargetAbi.NONE
        assert ctx.is_release is False

    def test_resolution_is_memoized(self) -> None:
        """Repeated reads return the identical cached value."""
        ctx = BuildContext.from_tasks(["assembleOssArm64Release"])
        first = ctx.flavor
        assert ctx.flavor is first
        assert ctx.target_abi is ctx.target_abi
        assert "flavor" in ctx.__dict__

    def test_first_resolution_wins(self) -> None:
        """The memoized flavor is fixed for the lifetime of a context."""
        ctx = BuildContext.from_tasks(["assembleOssRelease"])
        assert ctx.flavor == "OssRelease"
        other = BuildContext.from_tasks(["assemblePlayDebug"])
        assert other.flavor == "PlayDebug"
        assert ctx.flavor == "OssRelease"

    def test_context_is_immutable(self) -> None:
        ctx = BuildContext.from_tasks(["assembleOssRelease"])
        with pytest.raises(AttributeError):
            ctx.task_names = ("assemblePlayDebug",)  # type: ignore[misc]

    def test_summary(self) -> None:
        ctx = BuildContext.from_tasks(["assemblePlayArm64Release"])
        assert ctx.summary() == {
            "tasks": ["assemblePlayArm64Release"],
            "flavor": "PlayArm64Release",
            "target_abi": "arm64-v8a",
            "release": False,
        }
