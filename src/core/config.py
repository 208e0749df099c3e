"""Core configuration.

Centralizes environment variables (pydantic-settings) so the CLI and the
adapters read the same typed contract.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

API_ENDPOINTS: dict[str, str] = {
    "production": "https://keybase.io",
    "staging": "https://stage0.keybase.io",
}


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "keybasectl"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "keybasectl"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "keybasectl"
    return Path.home() / ".config" / "keybasectl"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def resolve_api_base_url(endpoint: str) -> str:
    """Map an endpoint name (`production`, `staging`) or URL to a base URL.

    Raises `ValueError` for anything else, including URLs without a host.
    """

    value = endpoint.strip()
    named = API_ENDPOINTS.get(value.lower())
    if named:
        return named
    if value.startswith(("http://", "https://")):
        try:
            host = httpx.URL(value).host
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid API endpoint URL {endpoint!r}: {exc}") from exc
        if not host:
            raise ValueError(f"API endpoint URL {endpoint!r} has no host")
        return value.rstrip("/")
    allowed = ", ".join(sorted(API_ENDPOINTS))
    raise ValueError(f"unknown API endpoint {endpoint!r}; use one of {allowed} or an http(s) URL")


def split_users(values: list[str] | str | None) -> list[str]:
    """Flatten `--user a,b --user c` style input into `["a", "b", "c"]`.

    Order is kept and blanks are dropped; duplicates are left alone.
    """

    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    out: list[str] = []
    for value in values:
        out.extend(part.strip() for part in value.split(",") if part.strip())
    return out


class AppSettings(BaseSettings):
    """Application settings.

    Read from `KEYBASECTL_*` environment variables, then the project `.env`,
    then the per-user `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYBASECTL_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    user: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Usernames to look up (comma separated in the environment).",
    )
    api_endpoint: str = Field(
        default="production",
        min_length=1,
        description="Keybase API endpoint: 'production', 'staging' or a base URL.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="keybasectl/0.1 (+https://keybase.io)",
        min_length=1,
        description="User-Agent sent to the API.",
    )
    debug: bool = Field(
        default=False,
        description="Emit debug logging on stderr.",
    )

    @field_validator("user", mode="before")
    @classmethod
    def _split_user(cls, value: object) -> object:
        if value is None or isinstance(value, (str, list)):
            return split_users(value)  # type: ignore[arg-type]
        return value

    @field_validator("api_endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        resolve_api_base_url(value)
        return value

    @property
    def api_base_url(self) -> str:
        return resolve_api_base_url(self.api_endpoint)
