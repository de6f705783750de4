"""Tests for commitgate.config module."""

from commitgate.config import (
    DEFAULT_CLI_COMMAND,
    MAX_DIFF_CHARS,
    SENTINEL_END,
    SENTINEL_START,
    BackendConfig,
    BackendKind,
    backend_config_to_dict,
    load_backend_config_from_dict,
)


class TestBackendKind:
    """Tests for BackendKind enum."""

    def test_values(self):
        """Test the configured backend names."""
        assert [k.value for k in BackendKind] == ["schema", "grammar", "freeform", "cli"]

    def test_from_string(self):
        """Test lookup by value."""
        assert BackendKind("grammar") is BackendKind.GRAMMAR


class TestConstants:
    """Tests for module constants."""

    def test_sentinels(self):
        """Test the sentinel marker strings."""
        assert SENTINEL_START == "<commit-start>"
        assert SENTINEL_END == "<commit-end>"

    def test_max_diff_chars(self):
        """Test the diff truncation limit."""
        assert MAX_DIFF_CHARS == 10000


class TestBackendConfig:
    """Tests for BackendConfig dataclass."""

    def test_defaults(self):
        """Test default settings target a local server."""
        config = BackendConfig()

        assert config.kind == BackendKind.SCHEMA
        assert config.host == "localhost"
        assert config.port == 1234
        assert config.model == "local-model"
        assert config.timeout == 30.0
        assert config.max_tokens == 2000
        assert config.temperature == 0.7
        assert config.api_key is None

    def test_base_url(self):
        """Test the base URL is built from host, port and path."""
        assert BackendConfig().base_url == "http://localhost:1234/v1"

    def test_base_url_without_leading_slash(self):
        """Test a base path without a leading slash is fixed."""
        config = BackendConfig(host="10.0.0.2", port=8080, base_path="api/v1/")
        assert config.base_url == "http://10.0.0.2:8080/api/v1"

    def test_default_cli_command(self):
        """Test the default CLI command is a copy."""
        config = BackendConfig()
        command = config.get_cli_command()

        assert command == DEFAULT_CLI_COMMAND
        command.append("--extra")
        assert config.get_cli_command() == DEFAULT_CLI_COMMAND

    def test_custom_cli_command(self):
        """Test a configured CLI command is used."""
        assert BackendConfig(cli_command=["llm"]).get_cli_command() == ["llm"]


class TestLoadBackendConfigFromDict:
    """Tests for load_backend_config_from_dict function."""

    def test_empty_dict(self):
        """Test an empty dict gives defaults."""
        assert load_backend_config_from_dict({}) == BackendConfig()

    def test_null_section(self):
        """Test an empty backend section gives defaults."""
        assert load_backend_config_from_dict({"backend": None}) == BackendConfig()

    def test_full_section(self):
        """Test every field is read and converted."""
        config = load_backend_config_from_dict({
            "backend": {
                "kind": "freeform",
                "host": "gpu-box",
                "port": "8000",
                "base_path": "/openai/v1",
                "model": "qwen2.5-coder",
                "timeout": 60,
                "max_tokens": 512,
                "temperature": 0.2,
                "api_key": "sk-local",
            }
        })

        assert config.kind == BackendKind.FREEFORM
        assert config.host == "gpu-box"
        assert config.port == 8000
        assert config.base_url == "http://gpu-box:8000/openai/v1"
        assert config.timeout == 60.0
        assert config.max_tokens == 512
        assert config.temperature == 0.2
        assert config.api_key == "sk-local"

    def test_unknown_kind_falls_back(self):
        """Test an unknown backend name uses the default."""
        config = load_backend_config_from_dict({"backend": {"kind": "anthropic"}})
        assert config.kind == BackendKind.SCHEMA

    def test_cli_command_string_is_split(self):
        """Test a CLI command given as one string is split."""
        config = load_backend_config_from_dict({"backend": {"cli_command": "llm -m local"}})
        assert config.cli_command == ["llm", "-m", "local"]


class TestBackendConfigToDict:
    """Tests for backend_config_to_dict function."""

    def test_omits_api_key(self):
        """Test the API key is never written out."""
        result = backend_config_to_dict(BackendConfig(api_key="secret"))

        assert "api_key" not in result["backend"]
        assert result["backend"]["kind"] == "schema"

    def test_cli_command_only_when_set(self):
        """Test cli_command is only written when configured."""
        assert "cli_command" not in backend_config_to_dict(BackendConfig())["backend"]
        config = BackendConfig(cli_command=["llm"])
        assert backend_config_to_dict(config)["backend"]["cli_command"] == ["llm"]

    def test_round_trip(self):
        """Test a saved config loads back unchanged."""
        config = BackendConfig(kind=BackendKind.GRAMMAR, port=8080, timeout=12.5)
        assert load_backend_config_from_dict(backend_config_to_dict(config)) == config
