# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# src/ipfs_http_api/config.py

"""
IPFS HTTP API Configuration

Reads toml config:
  /etc/ipfs-http-api/config.toml         -- system-wide defaults
  ~/.config/ipfs-http-api/config.toml    -- per-user overrides

Both files are optional. Deep merge: the system file is base, the user file
overrides at section level. Environment variables (IPFS_HOST,
IPFS_GATEWAY_PORT, IPFS_API_PORT, IPFS_TIMEOUT, IPFS_API_METHOD) win over
both.

Example:
    [ipfs]
    host = "ipfs.example.org"
    gateway_port = 8080
    api_port = 5001
    timeout = 10
    api_method = "POST"
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from ipfs_http_api.client import IPFSClient
from ipfs_http_api.types import (
    API_METHODS,
    DEFAULT_API_METHOD,
    DEFAULT_API_PORT,
    DEFAULT_GATEWAY_PORT,
    DEFAULT_HOST,
    DEFAULT_TIMEOUT,
    Endpoint,
)


DEFAULT_SYSTEM_CONFIG = Path("/etc/ipfs-http-api/config.toml")
DEFAULT_USER_CONFIG = Path.home() / ".config" / "ipfs-http-api" / "config.toml"

ENV_OVERRIDES = {
    "IPFS_HOST": "host",
    "IPFS_GATEWAY_PORT": "gateway_port",
    "IPFS_API_PORT": "api_port",
    "IPFS_TIMEOUT": "timeout",
    "IPFS_API_METHOD": "api_method",
}

LONG_TIMEOUT = 300


@dataclass
class ClientConfig:
    """Complete client configuration."""
    host: str = DEFAULT_HOST
    gateway_port: int = DEFAULT_GATEWAY_PORT
    api_port: int = DEFAULT_API_PORT
    timeout: int = DEFAULT_TIMEOUT
    api_method: str = DEFAULT_API_METHOD

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "gateway_port": self.gateway_port,
            "api_port": self.api_port,
            "timeout": self.timeout,
            "api_method": self.api_method,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ClientConfig":
        try:
            return cls(
                host=data.get("host", DEFAULT_HOST),
                gateway_port=int(data.get("gateway_port", DEFAULT_GATEWAY_PORT)),
                api_port=int(data.get("api_port", DEFAULT_API_PORT)),
                timeout=int(data.get("timeout", DEFAULT_TIMEOUT)),
                api_method=str(data.get("api_method", DEFAULT_API_METHOD)).upper(),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid [ipfs] config value: {e}") from e

    def endpoint(self) -> Endpoint:
        return Endpoint(
            host=self.host, gateway_port=self.gateway_port, api_port=self.api_port
        )

    def client(self) -> IPFSClient:
        """Create an IPFSClient from this config."""
        return IPFSClient(
            host=self.host,
            port=self.gateway_port,
            api_port=self.api_port,
            timeout=self.timeout,
            api_method=self.api_method,
        )

    def validate(self) -> tuple[list[str], list[str]]:
        """
        Validate configuration, return (errors, warnings).
        Empty errors list means config is usable.
        """
        errors = []
        warnings = []

        if not self.host:
            errors.append("host is not set")

        for name in ("gateway_port", "api_port"):
            port = getattr(self, name)
            if not 1 <= port <= 65535:
                errors.append(f"{name} {port} is outside 1-65535")

        if self.gateway_port == self.api_port:
            warnings.append("gateway_port and api_port are the same port")

        if self.timeout <= 0:
            errors.append(f"timeout must be positive, got {self.timeout}")
        elif self.timeout > LONG_TIMEOUT:
            warnings.append(f"timeout of {self.timeout}s is unusually long")

        if self.api_method not in API_METHODS:
            errors.append(f"api_method must be one of {', '.join(API_METHODS)}, got {self.api_method!r}")

        return errors, warnings


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base at section level.

    For top-level keys that are both dicts (TOML sections), merge their
    contents with override winning on key conflict.
    For non-dict values, override replaces base.
    """
    merged = dict(base)
    for key, val in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = {**merged[key], **val}
        else:
            merged[key] = val
    return merged


def _read_toml(path: Path) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _env_overrides(environ=None) -> dict:
    """Collect [ipfs] keys set through the environment."""
    environ = os.environ if environ is None else environ
    return {key: environ[var] for var, key in ENV_OVERRIDES.items() if environ.get(var)}


def load_config(
    config_path: Path = None, system_path: Path = None, environ=None
) -> ClientConfig:
    """Load config from the system and user toml files. Returns ClientConfig.

    Args:
        config_path: Path to the user config. Default: ~/.config/ipfs-http-api/config.toml
        system_path: Path to the system config. Default: /etc/ipfs-http-api/config.toml
        environ: Mapping to read overrides from. Default: os.environ

    Returns:
        ClientConfig object

    Raises:
        FileNotFoundError: If config_path is given explicitly and doesn't exist
        ValueError: If config values are invalid
    """
    system_file = system_path or DEFAULT_SYSTEM_CONFIG
    user_file = config_path or DEFAULT_USER_CONFIG

    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    config = {}
    if system_file.exists():
        config = _read_toml(system_file)
    if user_file.exists():
        config = _deep_merge(config, _read_toml(user_file))

    config = _deep_merge(config, {"ipfs": _env_overrides(environ)})

    return ClientConfig.from_dict(config.get("ipfs", {}))
