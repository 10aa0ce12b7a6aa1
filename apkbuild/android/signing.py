"""Release signing configuration.

Credentials come from local properties first and the environment second.
A release-like invocation without a keystore password is refused before
any configuration is produced, so no unsigned release artifact is built.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import SecretStr

from apkbuild.android.schema import AndroidConfigSchema, SigningConfigSchema
from apkbuild.config import Settings
from apkbuild.context import BuildContext

logger = logging.getLogger(__name__)

KEYSTORE_FILE = "release.keystore"
RELEASE_SIGNING = "release"


class MissingSigningError(Exception):
    """Raised when a release build is requested without signing credentials."""

    def __init__(self, flavor: str, code: str = "missing_signing") -> None:
        super().__init__(
            f"Signing credentials are required for release flavor '{flavor}'"
        )
        self.flavor = flavor
        self.code = code


def _secret_value(secret: SecretStr | None) -> str | None:
    return secret.get_secret_value() if secret is not None else None


def _first(preferred: str | None, fallback: str | None) -> str | None:
    return preferred if preferred is not None else fallback


def resolve_signing(
    local_props: Mapping[str, str],
    settings: Settings,
    project_root: Path,
) -> SigningConfigSchema | None:
    """Resolve the release signing config.

    Args:
        local_props: Local properties (may be empty).
        settings: Settings carrying environment credentials.
        project_root: Root project directory holding the keystore.

    Returns:
        SigningConfigSchema, or None when no keystore password is known.
    """
    keystore_pass = _first(
        local_props.get("KEYSTORE_PASS"), _secret_value(settings.keystore_pass)
    )
    alias = _first(local_props.get("ALIAS_NAME"), settings.alias_name)
    alias_pass = _first(
        local_props.get("ALIAS_PASS"), _secret_value(settings.alias_pass)
    )

    if keystore_pass is None:
        logger.debug("No keystore password configured")
        return None

    return SigningConfigSchema(
        name=RELEASE_SIGNING,
        store_file=str(project_root / KEYSTORE_FILE),
        store_password=SecretStr(keystore_pass),
        key_alias=alias,
        key_password=SecretStr(alias_pass) if alias_pass is not None else None,
    )


def apply_signing(
    android: AndroidConfigSchema,
    ctx: BuildContext,
    signing: SigningConfigSchema | None,
) -> None:
    """Apply signing to the release and debug build types.

    The release build type is signed only when no single target ABI was
    requested. The debug build type is always signed when a key exists.

    Args:
        android: Configuration to update.
        ctx: Invocation context.
        signing: Resolved signing config, or None.

    Raises:
        MissingSigningError: If signing is absent for a release-like invocation.
    """
    if signing is None:
        if ctx.is_release:
            raise MissingSigningError(ctx.flavor)
        return

    android.signing_configs[signing.name] = signing
    if not ctx.target_abi.is_set:
        android.build_type("release").signing_config = signing.name
    android.build_type("debug").signing_config = signing.name
    logger.info("Configured %s signing with %s", signing.name, signing.store_file)


__all__ = ["MissingSigningError", "apply_signing", "resolve_signing"]
