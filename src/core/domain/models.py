"""Domain models (Pydantic v2).

These models describe *what* the lookup API returns and *what* the tool
reports, not *how* it is fetched. Remote payloads are sparse and evolve, so
every remote model ignores unknown keys and keeps its fields optional.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class LookupKind(str, Enum):
    """Which field group the lookup asks for.

    The value is the `fields=` selector sent to the API.
    """

    IDENTITY = "basics"
    PUBLIC_KEY = "public_keys"

    def label(self) -> str:
        return "public key" if self is LookupKind.PUBLIC_KEY else "user"


class ApiStatus(BaseModel):
    """Status block of the API envelope. Informational only."""

    model_config = ConfigDict(extra="ignore")

    desc: str | None = Field(default=None, description="Human readable status.")
    code: int | None = Field(default=None, description="Numeric status code (0 means OK).")
    name: str | None = Field(default=None, description="Symbolic status name, e.g. 'OK'.")


class UserBasics(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    username: str | None = None
    username_cased: str | None = None
    track_version: int | None = None
    salt: str | None = None


class PublicKeyInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    kid: str | None = Field(default=None, description="Keybase key id.")
    key_fingerprint: str | None = Field(default=None, description="PGP fingerprint, if any.")
    key_type: int | None = Field(default=None, description="1 = public, 2 = private.")


class PublicKeys(BaseModel):
    model_config = ConfigDict(extra="ignore")

    primary: PublicKeyInfo | None = None


class RemoteUser(BaseModel):
    """A non-null slot of the `them` array.

    Any JSON object qualifies, including `{}`: presence alone means "found".
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    basics: UserBasics | None = None
    public_keys: PublicKeys | None = None

    def display_name(self) -> str | None:
        if self.basics is None:
            return None
        return self.basics.username_cased or self.basics.username

    def fingerprint(self) -> str | None:
        if self.public_keys is None or self.public_keys.primary is None:
            return None
        primary = self.public_keys.primary
        return primary.key_fingerprint or primary.kid


class LookupEnvelope(BaseModel):
    """Top-level response object: status plus positional result array."""

    model_config = ConfigDict(extra="ignore")

    status: ApiStatus | None = None
    them: list[RemoteUser | None]


class LookupResult(BaseModel):
    """Found/not-found partition of one lookup.

    `found` and `not_found` are subsequences of the requested identifiers,
    in request order, and together contain every one of them exactly once.
    """

    kind: LookupKind
    found: list[str] = Field(default_factory=list)
    not_found: list[str] = Field(default_factory=list)
    entries: dict[str, RemoteUser] = Field(
        default_factory=dict,
        description="Decoded entries of found identifiers (display only).",
    )
    status: ApiStatus | None = None

    @property
    def complete(self) -> bool:
        return not self.not_found


class LookupReport(BaseModel):
    """Outcome of one CLI run (identity lookup plus optional key lookup)."""

    identifiers: list[str] = Field(default_factory=list)
    api_base_url: str
    identity: LookupResult | None = None
    public_keys: LookupResult | None = None
    errors: list[str] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        return not self.errors
