"""Build output fingerprinting.

This module handles:
- Computing SHA-256 digests of build outputs
- Writing sibling <name>.sha256sum.txt checksum files
- Discovering variant outputs under the APK output root
- Exporting per-ABI checksum entries to the CI environment file
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from apkbuild.context import BuildContext
from apkbuild.types import ChecksumResult

logger = logging.getLogger(__name__)

CHECKSUM_SUFFIX = ".sha256sum.txt"

# Default chunk size for hashing
HASH_CHUNK_SIZE = 64 * 1024  # 64KB

# (filename marker, CI key suffix); checked in order, first match wins
CI_ABI_KEYS: tuple[tuple[str, str], ...] = (
    ("-arm64", "ARM64"),
    ("-armeabi", "ARM"),
    ("-x86_64", "X64"),
)

OUTPUT_EXTENSIONS = {".apk", ".aab"}


@dataclass
class VariantOutput:
    """A build output file belonging to a variant.

    Attributes:
        variant_name: Camel-case variant name (e.g. "ossRelease").
        path: Path to the output file.
    """

    variant_name: str
    path: Path


def fingerprint(data: bytes) -> str:
    """Compute the SHA-256 digest of raw bytes.

    Args:
        data: Input bytes.

    Returns:
        64-character lowercase hex digest.
    """
    return hashlib.sha256(data).hexdigest()


def compute_file_hash(
    file_path: Path,
    chunk_size: int = HASH_CHUNK_SIZE,
) -> str:
    """Compute SHA-256 hash of a file.

    Args:
        file_path: Path to the file.
        chunk_size: Size of chunks for streaming hash.

    Returns:
        SHA-256 hex digest.

    Raises:
        OSError: If the file cannot be read.
    """
    sha256 = hashlib.sha256()
    with file_path.open("rb") as f:
        while chunk := f.read(chunk_size):
            sha256.update(chunk)
    return sha256.hexdigest()


def checksum_path_for(output: Path) -> Path:
    """Return the checksum file path for an output (same dir, stem + suffix)."""
    return output.parent / f"{output.stem}{CHECKSUM_SUFFIX}"


def ci_env_entries(output_name: str, sum_path: Path, sha256: str) -> list[str]:
    """Build CI environment entries for an output.

    Args:
        output_name: Output file name, used to detect the ABI.
        sum_path: Checksum file path; exported as an absolute path.
        sha256: Hex digest.

    Returns:
        KEY=value lines, empty if the file name carries no known ABI.
    """
    for marker, key in CI_ABI_KEYS:
        if marker in output_name:
            return [
                f"SUM_{key}={sum_path.absolute()}",
                f"SHA256_{key}={sha256}",
            ]
    return []


def append_ci_env(env_file: Path | None, lines: list[str]) -> bool:
    """Append KEY=value lines to the CI environment file.

    Nothing is written unless the file already exists.

    Args:
        env_file: CI environment file path, or None.
        lines: Lines to append.

    Returns:
        True if lines were written.
    """
    if env_file is None or not lines or not env_file.is_file():
        return False
    with env_file.open("a", encoding="utf-8") as f:
        for line in lines:
            f.write(f"{line}\n")
    logger.debug("Appended %d entries to %s", len(lines), env_file)
    return True


def write_checksum(
    output: Path,
    ci_env_file: Path | None = None,
) -> ChecksumResult:
    """Fingerprint an output and write its checksum file.

    Rewriting an unchanged output produces identical checksum content.

    Args:
        output: Build output file.
        ci_env_file: Optional CI environment file to receive entries.

    Returns:
        ChecksumResult describing the written checksum.
    """
    sha256 = compute_file_hash(output)
    sum_path = checksum_path_for(output)
    sum_path.write_text(sha256, encoding="utf-8")

    lines = ci_env_entries(output.name, sum_path, sha256)
    append_ci_env(ci_env_file, lines)

    logger.info("Wrote checksum for %s: %s", output.name, sha256)
    return ChecksumResult(
        output=output,
        checksum_file=sum_path,
        sha256=sha256,
        ci_env_lines=lines,
    )


def _variant_name(*parts: str) -> str:
    head, *rest = parts
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def discover_variant_outputs(apk_root: Path) -> Iterator[VariantOutput]:
    """Discover build outputs under an APK output root.

    Expects <apk_root>/<productFlavor>/<buildType>/<file> or, for projects
    without product flavors, <apk_root>/<buildType>/<file>.

    Args:
        apk_root: APK output root directory.

    Yields:
        VariantOutput for each output file found, in sorted order.
    """
    if not apk_root.is_dir():
        logger.warning("APK output directory does not exist: %s", apk_root)
        return

    for path in sorted(apk_root.rglob("*")):
        if path.suffix.lower() not in OUTPUT_EXTENSIONS:
            continue
        parts = path.relative_to(apk_root).parts[:-1]
        if not parts:
            continue
        yield VariantOutput(variant_name=_variant_name(*parts), path=path)


def calculate_checksums(
    ctx: BuildContext,
    apk_root: Path,
    ci_env_file: Path | None = None,
) -> list[ChecksumResult]:
    """Fingerprint the outputs of the variant selected by the context.

    Variants are matched against the resolved flavor ignoring case.
    Outputs that are not regular files are skipped.

    Args:
        ctx: Invocation context.
        apk_root: APK output root directory.
        ci_env_file: Optional CI environment file.

    Returns:
        One ChecksumResult per fingerprinted output.
    """
    flavor = ctx.flavor.lower()
    results: list[ChecksumResult] = []

    for variant in discover_variant_outputs(apk_root):
        if variant.variant_name.lower() != flavor:
            continue
        if not variant.path.is_file():
            continue
        results.append(write_checksum(variant.path, ci_env_file=ci_env_file))

    logger.info(
        "Fingerprinted %d output(s) for flavor %r in %s",
        len(results),
        ctx.flavor,
        apk_root,
    )
    return results


def checksum_task_name(ctx: BuildContext) -> str:
    """Return the name of the checksum task for the context's flavor."""
    return f"calculate{ctx.flavor}APKsSHA256"


__all__ = [
    "CHECKSUM_SUFFIX",
    "CI_ABI_KEYS",
    "HASH_CHUNK_SIZE",
    "VariantOutput",
    "append_ci_env",
    "calculate_checksums",
    "checksum_path_for",
    "checksum_task_name",
    "ci_env_entries",
    "compute_file_hash",
    "discover_variant_outputs",
    "fingerprint",
    "write_checksum",
]
