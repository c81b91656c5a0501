"""Operator settings — env-driven defaults for the CLI.

Centralized config using pydantic-settings. Reads from a .env file and
RELAYPUB_* environment variables; command-line flags override both.

Examples
--------
Override via environment::

    export RELAYPUB_HOST=downloads.example.org:2222
    export RELAYPUB_USER=deploy
    export RELAYPUB_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from relaypub.models.config import DEFAULT_BUILD_SCRIPT


class ReleaseSettings(BaseSettings):
    """Defaults for every ``relaypub`` flag, overridable from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RELAYPUB_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "INFO"

    # Local side
    source_dir: Path = Path("../RelayClient")
    build_script: Path = DEFAULT_BUILD_SCRIPT
    artifact_extension: str = ".zip"
    release_dir: Path = Path("downloads")
    manifest_name: str = "relayClient.json"

    # Remote side
    host: str = "host.ext"
    user: str = "user"
    remote_dir: str = "/home/user/www/public_html"
