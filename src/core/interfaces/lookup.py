"""Lookup service contract.

A structural Protocol so the pipeline can run against the Keybase adapter or
any stand-in with the same `lookup` coroutine.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import LookupKind, LookupResult


@runtime_checkable
class UserLookupService(Protocol):
    """Resolve a batch of usernames with one remote call.

    Rules:
    - `lookup` is async because it does HTTP I/O.
    - Raises `NotFoundError` alongside a partial result, `TransportError` or
      `DecodeError` on outright failure.
    """

    base_url: str

    async def lookup(self, identifiers: Sequence[str], kind: LookupKind) -> LookupResult:
        ...
