"""Configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

DEFAULT_CONVERSATION_WINDOW_SECONDS = 3600
DEFAULT_SCHEMA_SAMPLE_LIMIT = 1000


def _int_setting(raw: str | None, name: str, default: int) -> int:
    """Parse an integer setting, raising ValueError with the setting name."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


@dataclass
class Config:
    """Application configuration."""

    screen_name: str
    tweets_path: Path | None = None
    dms_path: Path | None = None
    owner_id: str | None = None
    output_dir: Path | None = None
    conversation_window_seconds: int = DEFAULT_CONVERSATION_WINDOW_SECONDS
    schema_sample_limit: int = DEFAULT_SCHEMA_SAMPLE_LIMIT

    @classmethod
    def from_env(cls, env_file: Path | None = None, screen_name: str | None = None) -> Config:
        """Load configuration from environment and .env file.

        Args:
            env_file: Path to .env file. If None, only the process
                     environment is consulted.
            screen_name: Explicit screen name, taking precedence over
                     SCREEN_NAME.

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If required SCREEN_NAME is not set, or a numeric
                setting cannot be parsed.
        """
        # Load from .env file if provided
        config: dict[str, Any] = {}
        if env_file and env_file.exists():
            config = dict(dotenv_values(env_file))

        def get(name: str) -> str | None:
            # Environment variables override .env file
            return os.environ.get(name) or config.get(name)

        screen_name = screen_name or get("SCREEN_NAME")
        if not screen_name:
            raise ValueError("SCREEN_NAME is required")

        tweets_path_str = get("TWEETS_PATH")
        dms_path_str = get("DMS_PATH")
        output_dir_str = get("OUTPUT_DIR")

        return cls(
            screen_name=screen_name.lstrip("@"),
            tweets_path=Path(tweets_path_str) if tweets_path_str else None,
            dms_path=Path(dms_path_str) if dms_path_str else None,
            owner_id=get("OWNER_ID"),
            output_dir=Path(output_dir_str) if output_dir_str else None,
            conversation_window_seconds=_int_setting(
                get("CONVERSATION_WINDOW_SECONDS"),
                "CONVERSATION_WINDOW_SECONDS",
                DEFAULT_CONVERSATION_WINDOW_SECONDS,
            ),
            schema_sample_limit=_int_setting(
                get("SCHEMA_SAMPLE_LIMIT"),
                "SCHEMA_SAMPLE_LIMIT",
                DEFAULT_SCHEMA_SAMPLE_LIMIT,
            ),
        )

    def validate(self) -> list[str]:
        """Validate configuration.

        Returns:
            List of missing required field names.
        """
        missing = []
        if not self.screen_name:
            missing.append("SCREEN_NAME")
        if not self.tweets_path and not self.dms_path:
            missing.append("TWEETS_PATH")
        return missing

    def has_tweets(self) -> bool:
        """Check if a tweets archive file is configured."""
        return self.tweets_path is not None

    def has_dms(self) -> bool:
        """Check if a direct-messages archive file is configured."""
        return self.dms_path is not None

    def with_overrides(self, **changes: Any) -> Config:
        """Create a new config with the given fields replaced.

        ``None`` values are ignored so CLI flags that were not given leave
        the loaded configuration untouched.

        Args:
            **changes: Field names and their new values.

        Returns:
            New Config instance.
        """
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
