"""Configuration for commitgate generation backends.

Configuration is loaded from ~/.commitgate/config.yaml, the environment and
CLI flags (see commitgate.global_config). This module holds the defaults
and the BackendConfig dataclass.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BackendKind(Enum):
    """Supported generation backends."""

    SCHEMA = "schema"  # OpenAI-compatible server, JSON schema response_format
    GRAMMAR = "grammar"  # OpenAI-compatible server, GBNF grammar
    FREEFORM = "freeform"  # OpenAI-compatible server, unconstrained chat
    CLI = "cli"  # Shell-spawned CLI tool


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================

DEFAULT_BACKEND = BackendKind.SCHEMA
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1234
DEFAULT_BASE_PATH = "/v1"
DEFAULT_MODEL = "local-model"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_CLI_COMMAND = ["q", "chat", "--trust-all-tools", "--no-interactive"]

# Local servers ignore the key, but the OpenAI client requires one
DEFAULT_API_KEY = "not-needed"

# Maximum characters of staged diff sent to the model
MAX_DIFF_CHARS = 10000

# Markers the freeform prompt asks the model to wrap its message in
SENTINEL_START = "<commit-start>"
SENTINEL_END = "<commit-end>"


@dataclass
class BackendConfig:
    """Connection and sampling settings for a generation backend."""

    kind: BackendKind = DEFAULT_BACKEND
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    base_path: str = DEFAULT_BASE_PATH
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    api_key: Optional[str] = None
    cli_command: Optional[list[str]] = None

    @property
    def base_url(self) -> str:
        """HTTP base URL of the OpenAI-compatible server."""
        path = self.base_path if self.base_path.startswith("/") else f"/{self.base_path}"
        return f"http://{self.host}:{self.port}{path.rstrip('/')}"

    def get_cli_command(self) -> list[str]:
        return list(self.cli_command or DEFAULT_CLI_COMMAND)


def load_backend_config_from_dict(config_dict: dict) -> BackendConfig:
    """Load BackendConfig from a configuration dictionary.

    Unknown backend names fall back to the default backend.

    Args:
        config_dict: Dictionary with an optional "backend" section.

    Returns:
        BackendConfig instance.
    """
    section = config_dict.get("backend", {}) or {}

    kind_str = section.get("kind", DEFAULT_BACKEND.value)
    try:
        kind = BackendKind(kind_str)
    except ValueError:
        kind = DEFAULT_BACKEND

    cli_command = section.get("cli_command")
    if isinstance(cli_command, str):
        cli_command = cli_command.split()

    return BackendConfig(
        kind=kind,
        host=section.get("host", DEFAULT_HOST),
        port=int(section.get("port", DEFAULT_PORT)),
        base_path=section.get("base_path", DEFAULT_BASE_PATH),
        model=section.get("model", DEFAULT_MODEL),
        timeout=float(section.get("timeout", DEFAULT_TIMEOUT)),
        max_tokens=int(section.get("max_tokens", DEFAULT_MAX_TOKENS)),
        temperature=float(section.get("temperature", DEFAULT_TEMPERATURE)),
        api_key=section.get("api_key"),
        cli_command=cli_command,
    )


def backend_config_to_dict(config: BackendConfig) -> dict:
    """Convert BackendConfig to a dictionary for saving.

    The API key is never written out.

    Args:
        config: BackendConfig instance.

    Returns:
        Dictionary representation.
    """
    section = {
        "kind": config.kind.value,
        "host": config.host,
        "port": config.port,
        "base_path": config.base_path,
        "model": config.model,
        "timeout": config.timeout,
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }
    if config.cli_command:
        section["cli_command"] = list(config.cli_command)
    return {"backend": section}
