# tests/test_config.py
"""Test configuration loading"""

from pathlib import Path

import pytest

from piano.core.config import (
    DEFAULT_CIPHER_KEY,
    DEFAULT_RPC_URL,
    DEFAULT_TIMEOUT,
    default_config,
    load_config,
)
from piano.core.exceptions import ConfigError


def write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "piano.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    """Test load_config()"""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        """Test a missing piano.yaml in the working directory is not an error"""
        monkeypatch.chdir(tmp_path)
        assert load_config() == default_config()

    def test_reads_working_directory_file(self, tmp_path, monkeypatch):
        write_config(tmp_path, "rpc:\n  timeout: 5\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().rpc.timeout == 5.0

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.yaml")
        assert "not found" in exc_info.value.message

    def test_empty_file_uses_defaults(self, tmp_path):
        assert load_config(write_config(tmp_path, "")) == default_config()

    def test_full_file(self, tmp_path):
        path = write_config(tmp_path, """
rpc:
  url: "http://rpc.example/xmlrpc"
  secure_url: "https://rpc.example/xmlrpc"
  user_agent: "my-player/2.0"
  timeout: 12.5
cipher:
  key: "secretkey"
logging:
  level: "debug"
  directory: "logs"
""")

        config = load_config(path)

        assert config.rpc.url == "http://rpc.example/xmlrpc"
        assert config.rpc.secure_url == "https://rpc.example/xmlrpc"
        assert config.rpc.user_agent == "my-player/2.0"
        assert config.rpc.timeout == 12.5
        assert config.cipher.key == "secretkey"
        assert config.logging.level == "DEBUG"
        assert config.logging.directory.is_absolute()
        assert config.logging.directory.name == "logs"

    def test_partial_file_keeps_defaults(self, tmp_path):
        config = load_config(write_config(tmp_path, "logging:\n  level: WARNING\n"))

        assert config.rpc.url == DEFAULT_RPC_URL
        assert config.rpc.timeout == DEFAULT_TIMEOUT
        assert config.cipher.key == DEFAULT_CIPHER_KEY
        assert config.logging.level == "WARNING"
        assert config.logging.directory is None

    def test_config_is_frozen(self):
        config = default_config()
        with pytest.raises(AttributeError):
            config.rpc.timeout = 1.0


class TestInvalidConfig:
    """Test values that raise ConfigError"""

    @pytest.mark.parametrize("content", [
        "rpc: [unclosed",
        "- just\n- a list\n",
        "rpc: not-a-section\n",
        "rpc:\n  url: ftp://rpc.example\n",
        "rpc:\n  user_agent: ''\n",
        "rpc:\n  timeout: 0\n",
        "rpc:\n  timeout: -3\n",
        "rpc:\n  timeout: true\n",
        "rpc:\n  timeout: soon\n",
        "cipher:\n  key: abc\n",
        "cipher:\n  key: 12345\n",
        f"cipher:\n  key: {'k' * 57}\n",
        "logging:\n  level: LOUD\n",
        "logging:\n  directory: 42\n",
    ])
    def test_rejected(self, tmp_path, content):
        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, content))

    def test_error_details(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(write_config(tmp_path, "rpc:\n  timeout: -1\n"))
        assert exc_info.value.details["field"] == "rpc.timeout"
