"""Play Store publishing configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from apkbuild.android.schema import AndroidConfigSchema, PlayConfigSchema
from apkbuild.config import Settings
from apkbuild.types import PlayTrack

logger = logging.getLogger(__name__)

CREDENTIALS_FILE = "service_account_credentials.json"


def play_track(version_name: str | None) -> PlayTrack:
    """Pick the release track: beta versions go to the beta track."""
    if version_name is not None and "beta" in version_name:
        return PlayTrack.BETA
    return PlayTrack.PRODUCTION


def setup_play(
    android: AndroidConfigSchema,
    project_root: Path,
    settings: Settings,
) -> PlayConfigSchema | None:
    """Enable Play publishing when publisher credentials are available.

    A credentials file in the project root wins over the environment.

    Args:
        android: Configuration to update.
        project_root: Root project directory.
        settings: Settings carrying the publisher-credentials variable.

    Returns:
        The Play config, or None when publishing is not configured.
    """
    credentials_file = project_root / CREDENTIALS_FILE
    if credentials_file.is_file():
        credentials: str | None = str(credentials_file)
    elif settings.publisher_credentials is not None:
        credentials = None
    else:
        logger.debug("No publisher credentials; Play publishing disabled")
        return None

    android.play = PlayConfigSchema(
        track=play_track(android.default_config.version_name),
        default_to_app_bundles=True,
        service_account_credentials=credentials,
    )
    logger.info("Play publishing enabled on track %s", android.play.track.value)
    return android.play


__all__ = ["CREDENTIALS_FILE", "play_track", "setup_play"]
