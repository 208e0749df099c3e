"""Lookup URL construction."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote

from core.config import API_ENDPOINTS
from core.domain.models import LookupKind

DEFAULT_BASE_URL = API_ENDPOINTS["production"]
LOOKUP_PATH = "/_/api/1.0/user/lookup.json"


def build_lookup_url(
    identifiers: Sequence[str],
    kind: LookupKind,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Build the lookup URL for `identifiers`, in order.

    The position of each identifier in `usernames=` is the index of its entry
    in the response array. Identifiers are not validated, only percent-encoded
    one by one so the separating commas stay literal.
    """

    usernames = ",".join(quote(name, safe="") for name in identifiers)
    return f"{base_url.rstrip('/')}{LOOKUP_PATH}?usernames={usernames}&fields={kind.value}"
