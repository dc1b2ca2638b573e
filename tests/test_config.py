import pytest

import config


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2.5", 2.5),
        ("0", None),
        ("", None),
        ("soon", None),
    ],
)
def test_connect_timeout_from_environment(monkeypatch, raw, expected):
    monkeypatch.setattr(config, "CONFIG", {"connect_timeout": 30})
    monkeypatch.setenv("HELLO_CONNECT_TIMEOUT", raw)
    assert config.get_connect_timeout() == expected


def test_connect_timeout_unlimited_by_default(monkeypatch):
    monkeypatch.delenv("HELLO_CONNECT_TIMEOUT", raising=False)
    monkeypatch.setattr(config, "CONFIG", {})
    assert config.get_connect_timeout() is None


def test_connect_timeout_from_file(monkeypatch):
    monkeypatch.delenv("HELLO_CONNECT_TIMEOUT", raising=False)
    monkeypatch.setattr(config, "CONFIG", {"connect_timeout": 3})
    assert config.get_connect_timeout() == 3.0


def test_setting_prefers_environment_over_file(monkeypatch):
    monkeypatch.setattr(config, "CONFIG", {"address": "file:1"})
    monkeypatch.delenv("HELLO_ADDRESS", raising=False)
    assert config.get_setting("HELLO_ADDRESS", "address") == "file:1"
    monkeypatch.setenv("HELLO_ADDRESS", "env:2")
    assert config.get_setting("HELLO_ADDRESS", "address") == "env:2"


def test_load_config_reads_jsonc(tmp_path):
    path = tmp_path / "config.jsonc"
    path.write_text('{\n  // peer\n  "address": "127.0.0.1:9000",\n}\n', encoding="utf-8")
    assert config._load_config(path) == {"address": "127.0.0.1:9000"}


def test_load_config_missing_or_invalid(tmp_path):
    assert config._load_config(tmp_path / "absent.jsonc") == {}
    bad = tmp_path / "bad.jsonc"
    bad.write_text("{ not json", encoding="utf-8")
    assert config._load_config(bad) == {}
