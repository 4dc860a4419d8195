"""Unit tests for AssistantConfig, UIConfig and ServerConfig."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from assistant_chat.assistant.config import AssistantConfig, get_assistant_config
from assistant_chat.main import ServerConfig
from assistant_chat.ui.config import UIConfig


class TestAssistantConfig:
    """Tests for AssistantConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = AssistantConfig(
            api_key="pc-test-key",
            assistant_name="docs",
            control_url="https://control.example",
            data_url="https://data.example",
            timeout=30.0,
        )

        assert config.api_key == "pc-test-key"
        assert config.assistant_name == "docs"
        assert config.control_url == "https://control.example"
        assert config.data_url == "https://data.example"
        assert config.timeout == 30.0

    def test_config_with_default_urls(self) -> None:
        """Config falls back to the public Pinecone endpoints."""
        with patch.dict(
            "os.environ",
            {},
            clear=True,
        ):
            config = AssistantConfig(api_key="pc-key", assistant_name="docs")

        assert config.control_url == "https://api.pinecone.io"
        assert config.data_url == "https://prod-1-data.ke.pinecone.io"
        assert config.timeout == 120.0

    def test_config_fails_with_missing_api_key(self) -> None:
        """Config raises when API key is missing."""
        with pytest.raises(ValidationError) as exc_info:
            AssistantConfig(api_key="", assistant_name="docs")

        assert "PINECONE_API_KEY" in str(exc_info.value)

    def test_config_fails_with_whitespace_api_key(self) -> None:
        with pytest.raises(ValidationError):
            AssistantConfig(api_key="   ", assistant_name="docs")

    def test_config_fails_with_missing_assistant_name(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            AssistantConfig(api_key="pc-key", assistant_name=" ")

        assert "PINECONE_ASSISTANT_NAME" in str(exc_info.value)

    def test_config_strips_whitespace(self) -> None:
        config = AssistantConfig(api_key="  pc-key  ", assistant_name=" docs ")

        assert config.api_key == "pc-key"
        assert config.assistant_name == "docs"

    def test_config_strips_trailing_slash(self) -> None:
        config = AssistantConfig(
            api_key="pc-key", assistant_name="docs", control_url="https://c.example/"
        )

        assert config.control_url == "https://c.example"

    def test_config_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            AssistantConfig(api_key="pc-key", assistant_name="docs", timeout=0)

        assert "timeout" in str(exc_info.value).lower()


class TestGetAssistantConfig:
    """Tests for get_assistant_config factory function."""

    def test_get_config_from_environment(self) -> None:
        env = {"PINECONE_API_KEY": "pc-env-key", "PINECONE_ASSISTANT_NAME": "env-docs"}
        with patch.dict("os.environ", env):
            config = get_assistant_config()

        assert config.api_key == "pc-env-key"
        assert config.assistant_name == "env-docs"

    def test_get_config_fails_without_env_var(self) -> None:
        """Missing environment surfaces as a ValueError."""
        with patch.dict("os.environ", {}, clear=True), pytest.raises(ValueError):
            get_assistant_config()


class TestUIConfig:
    """Tests for UI flags read from the environment."""

    def test_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            config = UIConfig()

        assert config.api_base_url == "http://127.0.0.1:8000"
        assert config.show_assistant_files is False
        assert config.show_citations is True

    def test_flags_from_environment(self) -> None:
        env = {"SHOW_ASSISTANT_FILES": "true", "SHOW_CITATIONS": "0"}
        with patch.dict("os.environ", env, clear=True):
            config = UIConfig()

        assert config.show_assistant_files is True
        assert config.show_citations is False

    def test_api_url_follows_port(self) -> None:
        """The page targets the port the server actually binds."""
        with patch.dict("os.environ", {"PORT": "9000"}, clear=True):
            ui_config = UIConfig()
            server = ServerConfig()

        assert server.port == 9000
        assert ui_config.api_base_url == "http://127.0.0.1:9000"

    def test_api_url_uses_specific_host(self) -> None:
        with patch.dict("os.environ", {"HOST": "10.0.0.5", "PORT": "9000"}, clear=True):
            config = UIConfig()

        assert config.api_base_url == "http://10.0.0.5:9000"

    def test_explicit_api_url_wins(self) -> None:
        env = {"API_BASE_URL": "https://api.example", "PORT": "9000"}
        with patch.dict("os.environ", env, clear=True):
            config = UIConfig()

        assert config.api_base_url == "https://api.example"


class TestServerConfig:
    """Tests for the uvicorn process settings."""

    def test_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            config = ServerConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 8000
        assert config.log_level == "INFO"
        assert config.storage_secret

    def test_log_level_is_normalized(self) -> None:
        with patch.dict("os.environ", {"LOG_LEVEL": " debug "}, clear=True):
            config = ServerConfig()

        assert config.log_level == "DEBUG"

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ServerConfig(log_level="chatty")

        assert "LOG_LEVEL" in str(exc_info.value)

    def test_rejects_out_of_range_port(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(port=70000)
