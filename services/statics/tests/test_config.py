"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from services.statics.app.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.server.port == 8010
    assert settings.server.acao == "*"
    assert settings.server.max_body_size is None
    assert settings.jwt.leeway == 60
    assert settings.s3.bucket == "statics"
    assert settings.s3.region == "us-east-1"
    assert settings.client.http_client_retries == 3
    assert settings.client.http_client_buffer_size == 10
    assert settings.sentry.dsn is None
    assert settings.graylog.host is None
    assert settings.graylog.port == 12201


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("STATICS_SERVER__PORT", "9000")
    monkeypatch.setenv("STATICS_SERVER__ACAO", "https://shop.example.com")
    monkeypatch.setenv("STATICS_JWT__LEEWAY", "5")
    monkeypatch.setenv("STATICS_JWT__PUBLIC_KEY_PATH", "/etc/statics/jwt.pem")
    monkeypatch.setenv("STATICS_S3__BUCKET", "images")
    monkeypatch.setenv("STATICS_S3__REGION", "eu-west-1")
    monkeypatch.setenv("STATICS_CLIENT__HTTP_CLIENT_RETRIES", "0")
    monkeypatch.setenv("STATICS_SENTRY__DSN", "https://key@sentry.example.com/1")
    monkeypatch.setenv("STATICS_GRAYLOG__HOST", "graylog.internal")

    settings = get_settings()

    assert settings.server.port == 9000
    assert settings.server.acao == "https://shop.example.com"
    assert settings.jwt.leeway == 5
    assert settings.jwt.public_key_path == "/etc/statics/jwt.pem"
    assert settings.s3.bucket == "images"
    assert settings.s3.region == "eu-west-1"
    assert settings.client.http_client_retries == 0
    assert settings.sentry.dsn == "https://key@sentry.example.com/1"
    assert settings.graylog.host == "graylog.internal"


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("STATICS_SERVER__PORT", "9100")
    assert get_settings() is first


@pytest.mark.parametrize(
    "name,value",
    [
        ("STATICS_SERVER__PORT", "not-a-port"),
        ("STATICS_SERVER__PORT", "70000"),
        ("STATICS_JWT__LEEWAY", "-1"),
        ("STATICS_CLIENT__HTTP_CLIENT_BUFFER_SIZE", "0"),
        ("STATICS_SERVER__MAX_BODY_SIZE", "0"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
