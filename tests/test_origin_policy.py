import pytest

from backend.domain.services.origin_policy import is_origin_authorized, normalize_domain


@pytest.mark.parametrize(
    "entry, expected",
    [
        ("acme.com", "acme.com"),
        ("  ACME.com ", "acme.com"),
        ("https://acme.com/pricing", "acme.com"),
        ("acme.com:8080", "acme.com"),
        ("*.acme.com", "acme.com"),
        ("", None),
    ],
)
def test_normalize_domain(entry, expected):
    assert normalize_domain(entry) == expected


@pytest.mark.parametrize(
    "origin, allowed",
    [
        ("https://acme.com", True),
        ("https://widget.acme.com", True),
        ("http://ACME.com:3000", True),
        ("https://evil.com", False),
        ("https://notacme.com", False),
        ("https://acme.com.evil.com", False),
        ("null", False),
    ],
)
def test_whitelist_matches_host_and_subdomains(origin, allowed):
    assert is_origin_authorized(origin, ["acme.com"]) is allowed


def test_empty_whitelist_allows_any_origin():
    assert is_origin_authorized("https://anything.io", [])
    assert is_origin_authorized("https://anything.io", ["  ", ""])


def test_missing_origin_is_allowed():
    assert is_origin_authorized(None, ["acme.com"])


def test_platform_origin_is_always_allowed():
    assert is_origin_authorized(
        "https://app.chatforge.test/", ["acme.com"], platform_origin="https://app.chatforge.test"
    )
