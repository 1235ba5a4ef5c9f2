"""Tests for tweet_scrolls.core.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from tweet_scrolls.core.config import Config

ENV_NAMES = (
    "SCREEN_NAME",
    "TWEETS_PATH",
    "DMS_PATH",
    "OWNER_ID",
    "OUTPUT_DIR",
    "CONVERSATION_WINDOW_SECONDS",
    "SCHEMA_SAMPLE_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear configuration variables from the process environment."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Tests for Config class."""

    def test_from_env_with_screen_name(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading config with only SCREEN_NAME."""
        monkeypatch.setenv("SCREEN_NAME", "alice")

        config = Config.from_env()

        assert config.screen_name == "alice"
        assert config.tweets_path is None
        assert config.dms_path is None
        assert config.owner_id is None
        assert config.conversation_window_seconds == 3600
        assert config.schema_sample_limit == 1000

    def test_from_env_missing_screen_name(self) -> None:
        """Test that missing SCREEN_NAME raises ValueError."""
        with pytest.raises(ValueError, match="SCREEN_NAME is required"):
            Config.from_env()

    def test_from_env_explicit_screen_name(self) -> None:
        """Test that an explicit screen name satisfies the requirement."""
        config = Config.from_env(screen_name="@bob")
        assert config.screen_name == "bob"

    def test_from_env_strips_at_sign(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a leading @ is removed from the screen name."""
        monkeypatch.setenv("SCREEN_NAME", "@alice")
        assert Config.from_env().screen_name == "alice"

    def test_from_env_with_all_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading config with all values set."""
        monkeypatch.setenv("SCREEN_NAME", "alice")
        monkeypatch.setenv("TWEETS_PATH", "/data/tweets.js")
        monkeypatch.setenv("DMS_PATH", "/data/direct-messages.js")
        monkeypatch.setenv("OWNER_ID", "12345")
        monkeypatch.setenv("OUTPUT_DIR", "/out")
        monkeypatch.setenv("CONVERSATION_WINDOW_SECONDS", "600")
        monkeypatch.setenv("SCHEMA_SAMPLE_LIMIT", "50")

        config = Config.from_env()

        assert config.tweets_path == Path("/data/tweets.js")
        assert config.dms_path == Path("/data/direct-messages.js")
        assert config.owner_id == "12345"
        assert config.output_dir == Path("/out")
        assert config.conversation_window_seconds == 600
        assert config.schema_sample_limit == 50

    def test_from_env_file(self, tmp_path: Path) -> None:
        """Test loading values from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("SCREEN_NAME=carol\nTWEETS_PATH=/data/tweets.js\n")

        config = Config.from_env(env_file)

        assert config.screen_name == "carol"
        assert config.tweets_path == Path("/data/tweets.js")

    def test_environment_overrides_env_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that process environment wins over the .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("SCREEN_NAME=carol\n")
        monkeypatch.setenv("SCREEN_NAME", "dave")

        assert Config.from_env(env_file).screen_name == "dave"

    def test_invalid_window(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a non-integer window raises ValueError."""
        monkeypatch.setenv("SCREEN_NAME", "alice")
        monkeypatch.setenv("CONVERSATION_WINDOW_SECONDS", "soon")

        with pytest.raises(ValueError, match="CONVERSATION_WINDOW_SECONDS"):
            Config.from_env()

    def test_negative_sample_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a negative sample limit raises ValueError."""
        monkeypatch.setenv("SCREEN_NAME", "alice")
        monkeypatch.setenv("SCHEMA_SAMPLE_LIMIT", "-1")

        with pytest.raises(ValueError, match="non-negative"):
            Config.from_env()

    def test_validate_with_valid_config(self) -> None:
        """Test validation with valid config."""
        config = Config(screen_name="alice", tweets_path=Path("tweets.js"))
        assert config.validate() == []

    def test_validate_dms_only(self) -> None:
        """Test that a DMs archive alone is enough."""
        config = Config(screen_name="alice", dms_path=Path("dms.js"))
        assert config.validate() == []

    def test_validate_missing_values(self) -> None:
        """Test validation with nothing configured."""
        missing = Config(screen_name="").validate()
        assert "SCREEN_NAME" in missing
        assert "TWEETS_PATH" in missing

    def test_has_tweets_and_dms(self) -> None:
        """Test has_tweets and has_dms methods."""
        config = Config(screen_name="alice", tweets_path=Path("tweets.js"))
        assert config.has_tweets() is True
        assert config.has_dms() is False

    def test_with_overrides(self) -> None:
        """Test with_overrides replaces given values and ignores None."""
        config = Config(screen_name="alice", tweets_path=Path("tweets.js"))

        updated = config.with_overrides(dms_path=Path("dms.js"), tweets_path=None)

        assert updated.dms_path == Path("dms.js")
        assert updated.tweets_path == Path("tweets.js")
        assert config.dms_path is None
