"""Global configuration management for commitgate.

Handles user-level configuration stored in ~/.commitgate/config.yaml and
its merge with environment variables and CLI flags. Precedence, lowest to
highest: defaults, config file, environment, CLI flags.
"""

import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from commitgate.config import (
    BackendConfig,
    BackendKind,
    backend_config_to_dict,
    load_backend_config_from_dict,
)


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".commitgate"

# Environment variable -> (BackendConfig field, converter)
ENV_OVERRIDES = {
    "COMMITGATE_BACKEND": ("kind", BackendKind),
    "COMMITGATE_API_HOST": ("host", str),
    "COMMITGATE_API_PORT": ("port", int),
    "COMMITGATE_API_BASE_PATH": ("base_path", str),
    "COMMITGATE_API_MODEL": ("model", str),
    "COMMITGATE_API_TIMEOUT": ("timeout", float),
    "COMMITGATE_API_KEY": ("api_key", str),
}


def get_global_config_dir() -> Path:
    """Get the global commitgate configuration directory.

    Returns:
        Path to ~/.commitgate/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.commitgate/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.commitgate/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        GlobalConfigError: If the file exists but cannot be parsed.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.commitgate/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(exist_ok=True)
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def save_backend_config(config: BackendConfig) -> None:
    """Persist the backend section, keeping other keys of the file."""
    existing = load_global_config()
    existing.update(backend_config_to_dict(config))
    save_global_config(existing)


def apply_env_overrides(config: BackendConfig) -> BackendConfig:
    """Apply COMMITGATE_* environment variables to a config.

    Args:
        config: The config to start from.

    Returns:
        A new BackendConfig with overrides applied.

    Raises:
        GlobalConfigError: If a variable has an invalid value.
    """
    overrides = {}
    for env_var, (field_name, convert) in ENV_OVERRIDES.items():
        raw = os.getenv(env_var)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = convert(raw)
        except ValueError:
            raise GlobalConfigError(f"Invalid value for {env_var}: {raw!r}")
    return replace(config, **overrides)


def resolve_backend_config(
    kind: Optional[BackendKind] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    model: Optional[str] = None,
    timeout: Optional[float] = None,
) -> BackendConfig:
    """Build the effective backend configuration.

    Loads a .env file if present, then merges the config file, the
    environment and the explicit arguments (CLI flags).

    Args:
        kind: Backend override.
        host: Host override.
        port: Port override.
        model: Model override.
        timeout: Timeout override in seconds.

    Returns:
        The merged BackendConfig.
    """
    load_dotenv()

    config = load_backend_config_from_dict(load_global_config())
    config = apply_env_overrides(config)

    cli_overrides = {
        "kind": kind,
        "host": host,
        "port": port,
        "model": model,
        "timeout": timeout,
    }
    return replace(config, **{k: v for k, v in cli_overrides.items() if v is not None})
