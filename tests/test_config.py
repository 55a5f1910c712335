"""Test configuration."""

import pytest

from users_api.config import Config


def test_defaults():
    config = Config()
    assert config.host == "127.0.0.1"
    assert config.port == 3333
    assert not config.debug


def test_from_env():
    config = Config.from_env(
        {
            "USERS_API_HOST": "0.0.0.0",
            "USERS_API_PORT": "8080",
            "USERS_API_DEBUG": "true",
        }
    )
    assert config == Config(host="0.0.0.0", port=8080, debug=True)


def test_from_env_defaults():
    assert Config.from_env({}) == Config()


def test_from_os_environ(monkeypatch):
    monkeypatch.setenv("USERS_API_PORT", "4000")
    monkeypatch.delenv("USERS_API_HOST", raising=False)
    assert Config.from_env().port == 4000


@pytest.mark.parametrize("port", ["abc", "-1", "70000"])
def test_invalid_port(port):
    with pytest.raises(ValueError, match="Invalid port"):
        Config.from_env({"USERS_API_PORT": port})
