import pytest

from cfxresolver.domain.errors import UnrecognizedTokenFormat
from cfxresolver.domain.tokens import extract_token, is_canonical_token


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://cfx.re/join/abc123", "abc123"),
        ("cfx.re/join/abc123", "abc123"),
        ("HTTPS://CFX.RE/JOIN/AbC123", "AbC123"),
        ("https://Cfx.Re/Join/abc123/", "abc123"),
        ("https://cfx.re/join/abc123?utm=discord", "abc123"),
        ("see cfx.re/join/q-9_x.y for details", "q-9_x.y"),
        ("https://servers.fivem.net/servers/detail/xyz-9", "xyz-9"),
        ("https://servers.fivem.net/SERVERS/DETAIL/xyz-9/", "xyz-9"),
        ("abc123", "abc123"),
        ("  abc123\n", "abc123"),
    ],
)
def test_extract_token_accepts_known_shapes(raw: str, expected: str) -> None:
    assert extract_token(raw) == expected


def test_join_marker_wins_over_detail_marker() -> None:
    raw = "https://servers.fivem.net/servers/detail/second?from=cfx.re/join/first"

    assert extract_token(raw) == "first"


@pytest.mark.parametrize("raw", ["!!!", "", "   ", "abc 123", "https://example.com/abc", "cfx.re/join/"])
def test_extract_token_rejects_unrecognized_input(raw: str) -> None:
    with pytest.raises(UnrecognizedTokenFormat):
        extract_token(raw)


def test_extract_token_rejects_non_string() -> None:
    with pytest.raises(UnrecognizedTokenFormat):
        extract_token(None)  # type: ignore[arg-type]


def test_unrecognized_format_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        extract_token("???")


def test_is_canonical_token() -> None:
    assert is_canonical_token("abc-1_2.3")
    assert not is_canonical_token("abc/123")
    assert not is_canonical_token("abc\n")
