"""Shared fixtures for apkbuild tests."""

import pytest

# Variables the build reads from the environment; CI runners often set some
BUILD_ENV_VARS = (
    "KEYSTORE_PASS",
    "ALIAS_NAME",
    "ALIAS_PASS",
    "LOCAL_PROPERTIES",
    "NKMR_MINIFY",
    "nkmr_minify",
    "GITHUB_ENV",
    "ANDROID_PUBLISHER_CREDENTIALS",
)


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from build variables set in the host environment."""
    for name in BUILD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("APKBUILD_PROJECT_ROOT", raising=False)
    monkeypatch.delenv("APKBUILD_LOG_LEVEL", raising=False)
