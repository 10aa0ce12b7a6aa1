"""Properties file loading.

This module handles:
- Parsing Java-style .properties text
- Loading release metadata (package name, version name, version code)
- Loading local signing properties from a file or a base64 payload

Missing or unreadable required files propagate as OSError; no fallback
values are synthesized for them.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import Path

from apkbuild.types import ReleaseMetadata

logger = logging.getLogger(__name__)

METADATA_FILE = "sager.properties"
LOCAL_PROPERTIES_FILE = "local.properties"

REQUIRED_METADATA_KEYS = ("PACKAGE_NAME", "VERSION_NAME", "VERSION_CODE")

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}

# Only LF, CR and CRLF end a line
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
# Whitespace stripped from the start of a line
_LEADING_WHITESPACE = " \t\f"


class PropertiesError(Exception):
    """Raised when properties content cannot be decoded."""

    def __init__(self, message: str, code: str = "properties_error") -> None:
        super().__init__(message)
        self.code = code


class MetadataError(Exception):
    """Raised when release metadata is incomplete or malformed."""

    def __init__(
        self, message: str, key: str | None = None, code: str = "metadata_error"
    ) -> None:
        super().__init__(message)
        self.key = key
        self.code = code


def _logical_lines(text: str) -> list[str]:
    """Join continuation lines and drop blanks and comments."""
    lines: list[str] = []
    pending = ""
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_LEADING_WHITESPACE)
        if not pending and (not line or line[0] in "#!"):
            continue
        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def _unescape(value: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != "\\" or i + 1 >= len(value):
            out.append(ch)
            i += 1
            continue
        nxt = value[i + 1]
        if nxt == "u":
            digits = value[i + 2 : i + 6]
            if len(digits) != 4 or not _HEX_DIGITS.issuperset(digits):
                raise PropertiesError(
                    f"Malformed \\uXXXX escape: \\u{digits}",
                    code="bad_escape",
                )
            out.append(chr(int(digits, 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into raw key and raw value."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=: \t\f":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_LEADING_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_LEADING_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style .properties text.

    Supports '#' and '!' comments, '=', ':' or whitespace separators,
    backslash line continuations, and the usual escapes.

    Args:
        text: Properties file content.

    Returns:
        Mapping of keys to values; later duplicates override earlier ones.

    Raises:
        PropertiesError: If an escape sequence is malformed.
    """
    props: dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        props[_unescape(raw_key)] = _unescape(raw_value)
    return props


def load_properties(path: Path) -> dict[str, str]:
    """Load a .properties file.

    Properties files are ISO-8859-1 encoded.

    Args:
        path: Path to the file.

    Returns:
        Parsed properties.

    Raises:
        FileNotFoundError: If the file does not exist.
        PropertiesError: If the content is malformed.
    """
    text = path.read_text(encoding="latin-1")
    props = parse_properties(text)
    logger.debug("Loaded %d properties from %s", len(props), path)
    return props


def load_metadata(project_root: Path) -> ReleaseMetadata:
    """Load release metadata from the project's metadata properties.

    Args:
        project_root: Root project directory.

    Returns:
        ReleaseMetadata with package name, version name and code.

    Raises:
        FileNotFoundError: If the metadata file is missing.
        MetadataError: If a required key is missing or the code is not an integer.
    """
    props = load_properties(project_root / METADATA_FILE)

    for key in REQUIRED_METADATA_KEYS:
        if key not in props:
            raise MetadataError(
                f"Missing {key} in {METADATA_FILE}", key=key, code="missing_key"
            )

    try:
        version_code = int(props["VERSION_CODE"].strip())
    except ValueError:
        raise MetadataError(
            f"VERSION_CODE is not an integer: {props['VERSION_CODE']!r}",
            key="VERSION_CODE",
            code="invalid_version_code",
        ) from None

    return ReleaseMetadata(
        package_name=props["PACKAGE_NAME"],
        version_name=props["VERSION_NAME"],
        version_code=version_code,
    )


def load_local_properties(
    project_root: Path,
    encoded: str | None = None,
) -> dict[str, str]:
    """Load local signing properties.

    A non-blank base64 payload takes precedence over the local file.
    A missing local file yields an empty mapping.

    Args:
        project_root: Root project directory.
        encoded: Base64-encoded properties content, usually from the
            LOCAL_PROPERTIES environment variable.

    Returns:
        Parsed local properties.

    Raises:
        PropertiesError: If the base64 payload cannot be decoded.
    """
    if encoded and encoded.strip():
        try:
            raw = base64.b64decode(encoded.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise PropertiesError(
                f"LOCAL_PROPERTIES is not valid base64: {e}", code="bad_base64"
            ) from e
        logger.debug("Using local properties from environment payload")
        return parse_properties(raw.decode("latin-1"))

    local_file = project_root / LOCAL_PROPERTIES_FILE
    if local_file.exists():
        return load_properties(local_file)

    logger.debug("No local properties found under %s", project_root)
    return {}


__all__ = [
    "LOCAL_PROPERTIES_FILE",
    "METADATA_FILE",
    "MetadataError",
    "PropertiesError",
    "load_local_properties",
    "load_metadata",
    "load_properties",
    "parse_properties",
]
