import httpx

from core.domain.models import LookupKind
from adapters.keybase.query import DEFAULT_BASE_URL, LOOKUP_PATH, build_lookup_url


def test_identity_url_keeps_order_and_selects_basics():
    url = build_lookup_url(["alice", "bob"], LookupKind.IDENTITY)

    assert url.startswith(f"{DEFAULT_BASE_URL}{LOOKUP_PATH}?")
    assert "usernames=alice,bob" in url
    assert "fields=basics" in url


def test_public_key_url_selects_public_keys():
    url = build_lookup_url(["alice"], LookupKind.PUBLIC_KEY)

    assert "usernames=alice" in url
    assert "fields=public_keys" in url


def test_order_is_not_normalized():
    url = build_lookup_url(["carol", "alice", "carol"], LookupKind.IDENTITY)

    assert "usernames=carol,alice,carol&" in url


def test_custom_base_url_trailing_slash():
    url = build_lookup_url(["alice"], LookupKind.IDENTITY, base_url="http://localhost:8080/")

    assert url == "http://localhost:8080/_/api/1.0/user/lookup.json?usernames=alice&fields=basics"


def test_identifiers_are_percent_encoded_not_validated():
    url = build_lookup_url(["not a user!"], LookupKind.IDENTITY)

    assert "usernames=not%20a%20user%21&fields=basics" in url


def test_query_characters_in_a_username_stay_inside_usernames():
    url = httpx.URL(build_lookup_url(["x&fields=public_keys"], LookupKind.IDENTITY))

    assert url.params.get_list("usernames") == ["x&fields=public_keys"]
    assert url.params.get_list("fields") == ["basics"]


def test_fragment_character_does_not_cut_the_query():
    url = httpx.URL(build_lookup_url(["a#b", "c"], LookupKind.PUBLIC_KEY))

    assert url.fragment == ""
    assert url.params.get_list("usernames") == ["a#b,c"]
    assert url.params.get_list("fields") == ["public_keys"]
