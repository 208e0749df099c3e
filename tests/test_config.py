import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_config_dir, resolve_api_base_url, split_users


def test_split_users_flattens_and_keeps_order():
    assert split_users(["alice,bob", " carol ", "", "bob"]) == ["alice", "bob", "carol", "bob"]
    assert split_users("x,,y") == ["x", "y"]
    assert split_users(None) == []


@pytest.mark.parametrize(
    ("endpoint", "expected"),
    [
        ("production", "https://keybase.io"),
        ("PRODUCTION", "https://keybase.io"),
        ("staging", "https://stage0.keybase.io"),
        ("http://localhost:3000/", "http://localhost:3000"),
    ],
)
def test_resolve_api_base_url(endpoint, expected):
    assert resolve_api_base_url(endpoint) == expected


def test_resolve_api_base_url_rejects_unknown_names():
    with pytest.raises(ValueError, match="unknown API endpoint"):
        resolve_api_base_url("qa")


@pytest.mark.parametrize("endpoint", ["http://", "https://", "https:///path"])
def test_resolve_api_base_url_rejects_urls_without_host(endpoint):
    with pytest.raises(ValueError, match="API endpoint URL"):
        resolve_api_base_url(endpoint)


def test_settings_read_users_from_environment(monkeypatch):
    monkeypatch.setenv("KEYBASECTL_USER", "alice,bob")

    settings = AppSettings(_env_file=None)

    assert settings.user == ["alice", "bob"]
    assert settings.api_base_url == "https://keybase.io"


def test_settings_read_endpoint_and_debug(monkeypatch):
    monkeypatch.setenv("KEYBASECTL_API_ENDPOINT", "staging")
    monkeypatch.setenv("KEYBASECTL_DEBUG", "true")

    settings = AppSettings(_env_file=None)

    assert settings.api_base_url == "https://stage0.keybase.io"
    assert settings.debug is True


def test_settings_reject_bad_endpoint(monkeypatch):
    monkeypatch.setenv("KEYBASECTL_API_ENDPOINT", "nowhere")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_settings_reject_endpoint_without_host(monkeypatch):
    monkeypatch.setenv("KEYBASECTL_API_ENDPOINT", "http://")

    with pytest.raises(ValidationError, match="has no host"):
        AppSettings(_env_file=None)


def test_settings_read_project_env_file(tmp_path):
    (tmp_path / ".env").write_text("KEYBASECTL_USER=dana\nKEYBASECTL_HTTP_TIMEOUT_SECONDS=5\n", encoding="utf-8")

    settings = AppSettings()

    assert settings.user == ["dana"]
    assert settings.http_timeout_seconds == 5.0


def test_user_config_dir_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    assert get_user_config_dir() == tmp_path / "xdg" / "keybasectl"
