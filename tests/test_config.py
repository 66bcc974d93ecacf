"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from blog_admin_client.config import Settings
from tests.conftest import API_URL, make_settings


def test_settings_loads_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOG_ADMIN_API_URL", API_URL)
    monkeypatch.setenv("BLOG_ADMIN_PAGE_LIMIT", "25")

    settings = Settings()  # type: ignore[call-arg]

    assert settings.api_url == API_URL
    assert settings.page_limit == 25


def test_settings_defaults() -> None:
    settings = Settings(api_url=API_URL)
    assert settings.read_retries == 1
    assert settings.retry_base_delay == 1.0
    assert settings.retry_max_delay == 30.0
    assert settings.page_limit == 10
    assert settings.success_notification_seconds == 3.0
    assert settings.error_notification_seconds == 5.0
    assert settings.login_path == "/login"


def test_settings_missing_api_url_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BLOG_ADMIN_API_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings()  # type: ignore[call-arg]


def test_login_url_defaults_to_api_origin() -> None:
    settings = make_settings(api_url="https://admin.example.com/")
    assert settings.login_url == "https://admin.example.com/login"


def test_login_url_uses_console_url() -> None:
    settings = make_settings(console_url="https://console.example.com", login_path="signin")
    assert settings.login_url == "https://console.example.com/signin"


@pytest.mark.parametrize("value", [-1, 2, 5])
def test_read_retries_bounded(value: int) -> None:
    with pytest.raises(ValidationError, match="between 0 and 1"):
        make_settings(read_retries=value)


@pytest.mark.parametrize("value", [0, 1])
def test_read_retries_accepted(value: int) -> None:
    assert make_settings(read_retries=value).read_retries == value


def test_max_delay_below_base_rejected() -> None:
    with pytest.raises(ValidationError, match="RETRY_MAX_DELAY"):
        make_settings(retry_base_delay=2.0, retry_max_delay=1.0)


@pytest.mark.parametrize("field", ["page_limit", "request_timeout", "error_notification_seconds"])
def test_non_positive_values_rejected(field: str) -> None:
    with pytest.raises(ValidationError):
        make_settings(**{field: 0})
