# Author: PB and Claude
# Date: 2026-10-19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ---
# test/test_config.py

"""Tests for the client config module (toml-based)."""

import pytest

from ipfs_http_api import config as config_module
from ipfs_http_api.client import IPFSClient
from ipfs_http_api.config import (
    ClientConfig,
    _deep_merge,
    _env_overrides,
    load_config,
)


@pytest.fixture(autouse=True)
def no_default_files(monkeypatch, tmp_path):
    """Point the default config locations at files that don't exist."""
    monkeypatch.setattr(config_module, "DEFAULT_SYSTEM_CONFIG", tmp_path / "no-system.toml")
    monkeypatch.setattr(config_module, "DEFAULT_USER_CONFIG", tmp_path / "no-user.toml")


class TestClientConfig:
    def test_defaults(self):
        cfg = ClientConfig()
        assert cfg.to_dict() == {
            "host": "localhost",
            "gateway_port": 8080,
            "api_port": 5001,
            "timeout": 5,
            "api_method": "GET",
        }

    def test_from_dict_coerces(self):
        cfg = ClientConfig.from_dict({"host": "nas", "api_port": "5005", "timeout": "9", "api_method": "post"})
        assert cfg.host == "nas"
        assert cfg.api_port == 5005
        assert cfg.gateway_port == 8080
        assert cfg.timeout == 9
        assert cfg.api_method == "POST"

    def test_from_dict_bad_value(self):
        with pytest.raises(ValueError, match="Invalid"):
            ClientConfig.from_dict({"api_port": "not a port"})

    def test_endpoint(self):
        endpoint = ClientConfig(host="nas", gateway_port=1, api_port=2).endpoint()
        assert endpoint.api_url == "http://nas:2/api/v0"

    def test_client(self):
        client = ClientConfig(host="nas", gateway_port=81, api_port=5002, timeout=7, api_method="POST").client()
        assert isinstance(client, IPFSClient)
        assert client.ipfs_url == "http://nas:81/ipfs"
        assert client.api_url == "http://nas:5002/api/v0"
        assert client.timeout == 7
        assert client.api_method == "POST"

    def test_validate_ok(self):
        errors, warnings = ClientConfig().validate()
        assert errors == []
        assert warnings == []

    def test_validate_bad_port(self):
        errors, _ = ClientConfig(api_port=70000).validate()
        assert any("api_port" in e for e in errors)

    def test_validate_bad_timeout(self):
        errors, _ = ClientConfig(timeout=0).validate()
        assert any("timeout" in e for e in errors)

    def test_validate_long_timeout_warns(self):
        errors, warnings = ClientConfig(timeout=600).validate()
        assert errors == []
        assert any("unusually long" in w for w in warnings)

    def test_validate_same_ports_warns(self):
        _, warnings = ClientConfig(gateway_port=5001, api_port=5001).validate()
        assert any("same port" in w for w in warnings)

    def test_validate_bad_method(self):
        errors, _ = ClientConfig(api_method="PUT").validate()
        assert any("api_method" in e for e in errors)

    def test_validate_empty_host(self):
        errors, _ = ClientConfig(host="").validate()
        assert "host is not set" in errors


class TestDeepMerge:
    def test_section_level_merge(self):
        base = {"ipfs": {"host": "a", "timeout": 5}}
        override = {"ipfs": {"timeout": 10}}
        assert _deep_merge(base, override) == {"ipfs": {"host": "a", "timeout": 10}}

    def test_non_dict_replaced(self):
        assert _deep_merge({"x": 1}, {"x": 2}) == {"x": 2}

    def test_base_not_mutated(self):
        base = {"ipfs": {"host": "a"}}
        _deep_merge(base, {"ipfs": {"host": "b"}})
        assert base == {"ipfs": {"host": "a"}}


class TestEnvOverrides:
    def test_collects_known_vars(self):
        env = {"IPFS_HOST": "envhost", "IPFS_TIMEOUT": "3", "PATH": "/bin"}
        assert _env_overrides(env) == {"host": "envhost", "timeout": "3"}

    def test_empty_values_ignored(self):
        assert _env_overrides({"IPFS_HOST": ""}) == {}


class TestLoadConfig:
    def test_no_files_gives_defaults(self):
        assert load_config(environ={}) == ClientConfig()

    def test_user_file(self, tmp_path):
        user = tmp_path / "config.toml"
        user.write_text('[ipfs]\nhost = "nas"\napi_port = 5002\n')
        cfg = load_config(user, environ={})
        assert cfg.host == "nas"
        assert cfg.api_port == 5002
        assert cfg.gateway_port == 8080

    def test_user_overrides_system(self, tmp_path):
        system = tmp_path / "system.toml"
        system.write_text('[ipfs]\nhost = "system"\ntimeout = 30\n')
        user = tmp_path / "user.toml"
        user.write_text('[ipfs]\nhost = "user"\n')
        cfg = load_config(user, system_path=system, environ={})
        assert cfg.host == "user"
        assert cfg.timeout == 30

    def test_env_overrides_files(self, tmp_path):
        user = tmp_path / "user.toml"
        user.write_text('[ipfs]\nhost = "user"\ntimeout = 30\n')
        cfg = load_config(user, environ={"IPFS_HOST": "envhost", "IPFS_API_METHOD": "POST"})
        assert cfg.host == "envhost"
        assert cfg.timeout == 30
        assert cfg.api_method == "POST"

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "missing.toml", environ={})

    def test_invalid_toml_raises_value_error(self, tmp_path):
        user = tmp_path / "user.toml"
        user.write_text("[ipfs\nhost = ")
        with pytest.raises(ValueError):
            load_config(user, environ={})
