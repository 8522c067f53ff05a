import pytest

from delexi_proxy.domain.catalog import resolve_market

SUPPORTED = {"FR", "US", "CA", "BR", "GB", "DE", "ES", "IT"}


@pytest.mark.unit
@pytest.mark.parametrize(
    "requested, expected",
    [
        ("us", "US"),
        ("US", "US"),
        (" gb ", "FR"),
        ("Gb", "GB"),
        ("xx", "FR"),
        ("", "FR"),
        (None, "FR"),
    ],
)
def test_resolve_market(requested, expected):
    assert resolve_market(requested, "FR", SUPPORTED) == expected


@pytest.mark.unit
def test_resolved_market_is_always_supported():
    for requested in ("jp", "fr", "zz", None, "de"):
        assert resolve_market(requested, "FR", SUPPORTED) in SUPPORTED


@pytest.mark.unit
def test_default_is_normalized():
    assert resolve_market("nope", "us", SUPPORTED) == "US"
