"""Keybase user-lookup API adapter."""

from adapters.keybase.client import KeybaseLookupService, classify, decode_envelope
from adapters.keybase.query import DEFAULT_BASE_URL, LOOKUP_PATH, build_lookup_url

__all__ = [
	"DEFAULT_BASE_URL",
	"LOOKUP_PATH",
	"KeybaseLookupService",
	"build_lookup_url",
	"classify",
	"decode_envelope",
]
