"""Lookup error taxonomy.

`TransportError` and `DecodeError` abort a lookup. `NotFoundError` does not:
it travels with the partial `LookupResult` so callers still get the found
identifiers.
"""

from __future__ import annotations

from typing import Sequence

from core.domain.models import LookupKind, LookupResult


class KeybaseError(Exception):
    """Base class for every lookup failure."""


class TransportError(KeybaseError):
    """The API could not be reached, or the response body could not be read."""


class DecodeError(KeybaseError):
    """The response body is not JSON, or not the expected envelope shape."""


class NotFoundError(KeybaseError):
    """One or more identifiers are absent from the API response."""

    def __init__(
        self,
        identifiers: Sequence[str],
        *,
        kind: LookupKind,
        result: LookupResult,
    ) -> None:
        self.identifiers = list(identifiers)
        self.kind = kind
        self.result = result
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        names = ", ".join(self.identifiers)
        if self.kind is LookupKind.PUBLIC_KEY:
            return f"public key for user(s) {names} not found"
        return f"user(s) {names} not found"
