"""Configuration settings for apkbuild.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.

Tool settings use the APKBUILD_ prefix. Variables consumed by the build
itself (signing credentials, CI integration) keep their established
unprefixed names.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_project_root() -> Path:
    """Return the default project root (current working directory)."""
    return Path.cwd()


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the APKBUILD_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="APKBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Project layout
    project_root: Path = Field(
        default_factory=_default_project_root,
        description="Root project directory holding sager.properties",
    )
    project_name: str = Field(
        default="app",
        description="Name of the application module",
    )
    display_name: str = Field(
        default="Matsuri",
        description="Display name used for renamed output files",
    )
    apk_root: Path | None = Field(
        default=None,
        description="APK output root (defaults to <root>/<project>/build/outputs/apk)",
    )
    kotlin_version: str | None = Field(
        default=None,
        description="Kotlin stdlib version pinned for application modules",
    )
    native_jobs: int | None = Field(
        default=None,
        ge=1,
        description="Parallel jobs for native builds (defaults to CPU count)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )

    # Signing credentials
    keystore_pass: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("KEYSTORE_PASS", "keystore_pass"),
    )
    alias_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ALIAS_NAME", "alias_name"),
    )
    alias_pass: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("ALIAS_PASS", "alias_pass"),
    )
    local_properties_b64: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LOCAL_PROPERTIES", "local_properties_b64"),
        description="Base64-encoded local.properties content",
    )

    # Build switches
    nkmr_minify: str | None = Field(
        default=None,
        validation_alias=AliasChoices("NKMR_MINIFY", "nkmr_minify"),
        description="Set to '0' to disable minification and resource shrinking",
    )

    # CI / publishing
    ci_env_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_ENV", "ci_env_file"),
        description="CI environment file receiving checksum entries",
    )
    publisher_credentials: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ANDROID_PUBLISHER_CREDENTIALS", "publisher_credentials"
        ),
    )

    @property
    def minify_disabled(self) -> bool:
        """Whether minification was switched off from the environment."""
        return self.nkmr_minify == "0"

    @property
    def effective_apk_root(self) -> Path:
        """Return the APK output root, falling back to the module build dir."""
        if self.apk_root is not None:
            return self.apk_root
        return self.project_root / self.project_name / "build" / "outputs" / "apk"

    @property
    def effective_native_jobs(self) -> int:
        """Return the parallel job count for native builds."""
        return self.native_jobs or os.cpu_count() or 1


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Secrets are masked by pydantic.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
