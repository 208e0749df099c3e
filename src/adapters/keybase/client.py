"""Keybase user lookup.

One GET per lookup against `/_/api/1.0/user/lookup.json`. The API answers
with an envelope whose `them` array is positional: slot `i` belongs to the
`i`-th requested username, and `null` means "no such user".
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from adapters.keybase.query import build_lookup_url
from core.config import AppSettings
from core.domain.errors import DecodeError, NotFoundError, TransportError
from core.domain.models import ApiStatus, LookupEnvelope, LookupKind, LookupResult, RemoteUser
from core.logging_setup import get_logger

_log = get_logger("keybase")


def decode_envelope(body: bytes | str, *, logger: logging.Logger | None = None) -> LookupEnvelope:
    """Decode a lookup response body.

    Only the envelope shape is enforced: a JSON object whose `them` is an
    array of objects or nulls. Entry contents are parsed leniently; a slot
    that does not fit `RemoteUser` still counts as present.
    """

    logger = logger or _log
    try:
        payload: Any = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise DecodeError(f"response body is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")

    status: ApiStatus | None = None
    raw_status = payload.get("status")
    if isinstance(raw_status, dict):
        try:
            status = ApiStatus.model_validate(raw_status)
        except ValidationError:
            logger.debug("ignoring undecodable status block: %r", raw_status)

    raw_them = payload.get("them")
    if raw_them is None:
        detail = ""
        if status is not None and (status.name or status.desc):
            detail = f" (status {status.name or status.code}: {status.desc or 'no description'})"
        raise DecodeError(f"response has no 'them' array{detail}")
    if not isinstance(raw_them, list):
        raise DecodeError(f"'them' must be an array, got {type(raw_them).__name__}")

    them: list[RemoteUser | None] = []
    for index, slot in enumerate(raw_them):
        if slot is None:
            them.append(None)
            continue
        if not isinstance(slot, dict):
            raise DecodeError(f"'them[{index}]' must be an object or null, got {type(slot).__name__}")
        try:
            them.append(RemoteUser.model_validate(slot))
        except ValidationError as exc:
            logger.debug("them[%d] has unexpected fields, keeping it as a bare entry: %s", index, exc)
            them.append(RemoteUser())

    return LookupEnvelope(status=status, them=them)


def classify(identifiers: Sequence[str], envelope: LookupEnvelope, *, kind: LookupKind) -> LookupResult:
    """Pair `them[i]` with `identifiers[i]` and split found from not found.

    Raises `DecodeError` when the array length differs from the number of
    identifiers, since the positional pairing would then be meaningless.
    """

    if len(envelope.them) != len(identifiers):
        raise DecodeError(
            f"response has {len(envelope.them)} entries for {len(identifiers)} requested username(s)"
        )

    result = LookupResult(kind=kind, status=envelope.status)
    for identifier, entry in zip(identifiers, envelope.them):
        if entry is None:
            result.not_found.append(identifier)
        else:
            result.found.append(identifier)
            result.entries[identifier] = entry
    return result


class KeybaseLookupService:
    """Looks up usernames (or their public keys) in a single request.

    `client` is optional; when given, the caller owns it and it is not closed
    here. Without one, a client is built from `settings` for each lookup.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client
        self._logger = logger or _log

    @property
    def base_url(self) -> str:
        return self._settings.api_base_url

    async def lookup(self, identifiers: Sequence[str], kind: LookupKind) -> LookupResult:
        """Return the found/not-found split for `identifiers`.

        Raises `NotFoundError` (carrying the full result) when any identifier
        is missing, `TransportError` on network failures and `DecodeError` on
        unexpected bodies.
        """

        names = list(identifiers)
        self._logger.debug("lookup %s for username(s): %s", kind.label(), names)
        if not names:
            self._logger.debug("nothing to look up, skipping request")
            return LookupResult(kind=kind)

        url = build_lookup_url(names, kind, base_url=self.base_url)
        self._logger.debug("targeting keybase API url: %s", url)

        if self._client is not None:
            envelope = await self._fetch(self._client, url)
        else:
            async with build_async_client(self._settings) as client:
                envelope = await self._fetch(client, url)

        if envelope.status is not None and envelope.status.code not in (None, 0):
            self._logger.warning(
                "keybase API status %s (%s): %s",
                envelope.status.code,
                envelope.status.name,
                envelope.status.desc,
            )

        result = classify(names, envelope, kind=kind)
        for name in result.found:
            self._logger.debug("%s for %s found", kind.label(), name)
        for name in result.not_found:
            self._logger.debug("%s for %s not found", kind.label(), name)

        if result.not_found:
            raise NotFoundError(result.not_found, kind=kind, result=result)
        return result

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> LookupEnvelope:
        try:
            async with client.stream("GET", url) as response:
                body = await response.aread()
                self._logger.debug(
                    "response status %s, %d byte(s): %s",
                    response.status_code,
                    len(body),
                    body[:2048],
                )
                return decode_envelope(body, logger=self._logger)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"keybase lookup request failed: {exc}") from exc
