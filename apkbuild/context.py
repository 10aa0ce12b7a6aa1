"""Build parameter resolution from requested task names.

This module handles:
- Deriving the build flavor from the first requested task
- Deriving the target ABI from a single requested task
- Detecting release-like invocations

A BuildContext is constructed once per run and passed to every consumer.
Its resolved values are computed on first access and never change for
the lifetime of the context.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cached_property

from apkbuild.types import TargetAbi

logger = logging.getLogger(__name__)

# Verbs whose suffix names the flavor, checked in order
FLAVOR_VERBS = ("assemble", "install", "publish")
PUBLISH_SUFFIX = "Bundle"

# Checked in order; "arm64" must precede "arm"
ABI_MARKERS: tuple[tuple[str, TargetAbi], ...] = (
    ("arm64", TargetAbi.ARM64),
    ("arm", TargetAbi.ARM),
    ("x64", TargetAbi.X64),
)

RELEASE_FLAVOR_PATTERN = re.compile(r"(Oss|Expert|Play)Release")


def _substring_after(value: str, delimiter: str) -> str:
    _, _, tail = value.partition(delimiter)
    return tail


def _substring_before(value: str, delimiter: str) -> str:
    head, _, _ = value.partition(delimiter)
    return head


def resolve_flavor(task_names: Sequence[str]) -> str:
    """Derive the build flavor from the first requested task name.

    Args:
        task_names: Requested task names, in invocation order.

    Returns:
        The flavor (e.g. "OssRelease"), or an empty string when no task was
        requested or the first task carries no known verb.
    """
    if not task_names:
        return ""

    task_name = task_names[0]
    for verb in FLAVOR_VERBS:
        if verb not in task_name:
            continue
        flavor = _substring_after(task_name, verb)
        if verb == "publish":
            flavor = _substring_before(flavor, PUBLISH_SUFFIX)
        return flavor
    return ""


def resolve_target_abi(task_names: Sequence[str]) -> TargetAbi:
    """Derive the target ABI from the requested task names.

    Only a single requested task selects an ABI. Matching is
    case-insensitive and "arm64" wins over "arm".

    Args:
        task_names: Requested task names.

    Returns:
        The matching TargetAbi, or TargetAbi.NONE.
    """
    if len(task_names) != 1:
        return TargetAbi.NONE

    target_task = task_names[0].lower().strip()
    for marker, abi in ABI_MARKERS:
        if marker in target_task:
            return abi
    return TargetAbi.NONE


def is_release_flavor(flavor: str) -> bool:
    """Check whether a flavor names a release variant that must be signed."""
    return RELEASE_FLAVOR_PATTERN.search(flavor) is not None


@dataclass(frozen=True)
class BuildContext:
    """Invocation context for one run.

    Attributes:
        task_names: Requested task names, in invocation order.
    """

    task_names: tuple[str, ...] = ()

    @classmethod
    def from_tasks(cls, task_names: Iterable[str] | None) -> BuildContext:
        """Build a context from any iterable of task names."""
        return cls(task_names=tuple(task_names or ()))

    @cached_property
    def flavor(self) -> str:
        flavor = resolve_flavor(self.task_names)
        logger.debug("Resolved flavor %r from tasks %s", flavor, self.task_names)
        return flavor

    @cached_property
    def target_abi(self) -> TargetAbi:
        abi = resolve_target_abi(self.task_names)
        logger.debug("Resolved target ABI %r", abi.value)
        return abi

    @property
    def is_release(self) -> bool:
        """Whether this invocation produces a release artifact."""
        return is_release_flavor(self.flavor)

    def summary(self) -> dict[str, object]:
        """Return the resolved parameters as a JSON-friendly dict."""
        return {
            "tasks": list(self.task_names),
            "flavor": self.flavor,
            "target_abi": self.target_abi.value,
            "release": self.is_release,
        }


__all__ = [
    "ABI_MARKERS",
    "FLAVOR_VERBS",
    "BuildContext",
    "is_release_flavor",
    "resolve_flavor",
    "resolve_target_abi",
]
