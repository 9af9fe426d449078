"""Tests for Settings loading from YAML and the environment."""

from __future__ import annotations

import pytest

from logalert.core.config import Settings

CONFIG_YAML = """\
server:
  addr: 127.0.0.1
  port: 9090
basic:
  username: ops
  password: s3cret
zabbix:
  url: http://zabbix.internal/api_jsonrpc.php
  token: yaml-token
  host_group_id: "15"
elasticsearch:
  url: http://es.internal:9200
  username: elastic
"""


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    monkeypatch.setenv("LOGALERT_CONFIG_FILE", str(path))
    monkeypatch.chdir(tmp_path)
    return path


def test_settings_from_yaml(config_file):
    settings = Settings()

    assert settings.server.port == 9090
    assert settings.listen_address == "127.0.0.1:9090"
    assert settings.basic.username == "ops"
    assert settings.zabbix.token == "yaml-token"
    assert settings.zabbix.host_group_id == "15"
    assert settings.zabbix.agent_port == "22"
    assert settings.elasticsearch.url == "http://es.internal:9200"
    assert settings.elasticsearch.password == ""


def test_environment_overrides_yaml(config_file, monkeypatch):
    monkeypatch.setenv("ZABBIX__TOKEN", "env-token")
    monkeypatch.setenv("SERVER__PORT", "7070")

    settings = Settings()

    assert settings.zabbix.token == "env-token"
    assert settings.server.port == 7070
    assert settings.zabbix.url == "http://zabbix.internal/api_jsonrpc.php"


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("LOGALERT_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.listen_address == "0.0.0.0:8080"
    assert settings.zabbix.host_group_id == "2"
    assert settings.rate_limit == "100/minute"


def test_cors_origins_parsed(tmp_path, monkeypatch):
    monkeypatch.setenv("LOGALERT_CONFIG_FILE", str(tmp_path / "missing.yaml"))
    monkeypatch.chdir(tmp_path)

    settings = Settings(allowed_origins="https://a.test, https://b.test,")

    assert settings.cors_origins == ["https://a.test", "https://b.test"]
