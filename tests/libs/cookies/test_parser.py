from datetime import UTC, datetime

import pytest

from cookiekit.libs.cookies import DateParseError, ParseError, parse_set_cookie
from cookiekit.schemas import CookieRecord


def test_shared_attributes_cloned_to_every_pair():
    records = parse_set_cookie("a=1; b=2; domain=d; path=p")

    assert [(r.name, r.value) for r in records] == [("a", "1"), ("b", "2")]
    assert all(r.domain == "d" and r.path == "p" for r in records)


def test_set_cookie_with_httponly_flag():
    records = parse_set_cookie("gsid=none; path=/; domain=.example.com; httponly")

    assert records == [
        CookieRecord(
            name="gsid",
            value="none",
            path="/",
            domain=".example.com",
            httponly=True,
            secure=False,
        )
    ]


@pytest.mark.parametrize(
    "raw, secure, httponly",
    [
        ("a=1; secure", True, False),
        ("a=1; httponly", False, True),
        ("a=1; Secure; HttpOnly", True, True),
        ("secure; a=1", True, False),
        ("a=1", False, False),
    ],
)
def test_boolean_flags(raw, secure, httponly):
    (record,) = parse_set_cookie(raw)
    assert record.secure is secure
    assert record.httponly is httponly


@pytest.mark.parametrize(
    "raw",
    [
        "a\x01b=1",  # control character in a name
        "a=1\x02",  # control character in a value
        "a=café",  # non-ASCII value
        "a=1; foo; b=2",  # bare non-flag attribute
        "a=1; foo",  # bare non-flag attribute at end of input
        "=1",  # missing name
    ],
)
def test_malformed_input_rejected(raw):
    with pytest.raises(ParseError):
        parse_set_cookie(raw)


def test_separator_in_name_drops_fragment():
    assert [(r.name, r.value) for r in parse_set_cookie("a b=1")] == [("b", "1")]
    assert [(r.name, r.value) for r in parse_set_cookie("x:y=2")] == [("y", "2")]


def test_quoted_values():
    records = parse_set_cookie("a=\"hello\"; b='x'")
    assert [(r.name, r.value) for r in records] == [("a", "hello"), ("b", "x")]


def test_later_pair_overwrites_earlier():
    records = parse_set_cookie("a=1; a=2")
    assert [(r.name, r.value) for r in records] == [("a", "2")]


def test_value_may_contain_equals_and_be_empty():
    records = parse_set_cookie("tok=abc==; empty=; last=")
    assert [(r.name, r.value) for r in records] == [
        ("tok", "abc=="),
        ("empty", ""),
        ("last", ""),
    ]


@pytest.mark.parametrize("raw", ["", "   ", ";", "path=/; domain=x"])
def test_no_cookie_pairs_yields_nothing(raw):
    assert parse_set_cookie(raw) == []


@pytest.mark.parametrize(
    "raw",
    [
        "a=1; expires=Sun, 22-Sep-2013 14:27:43 GMT",
        "a=1; Expires=Sun, 22 Sep 2013 14:27:43 GMT",
        "a=1; EXPIRES=Sunday, 22-Sep-13 14:27:43 GMT",
    ],
)
def test_expires_parsed_case_insensitively(raw):
    (record,) = parse_set_cookie(raw)
    assert record.expires == datetime(2013, 9, 22, 14, 27, 43, tzinfo=UTC)


def test_invalid_expires_is_recoverable_error():
    with pytest.raises(DateParseError) as exc_info:
        parse_set_cookie("a=1; expires=notadate")

    assert exc_info.value.raw == "notadate"
    assert isinstance(exc_info.value, ParseError)


def test_reserved_attributes_are_case_insensitive():
    (record,) = parse_set_cookie("a=1; Path=/x; DOMAIN=example.org")
    assert record.path == "/x"
    assert record.domain == "example.org"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a=1", "example.com"),
        ("a=1; domain=", "example.com"),
        ("a=1; domain=other.org", "other.org"),
    ],
)
def test_default_domain(raw, expected):
    (record,) = parse_set_cookie(raw, "example.com")
    assert record.domain == expected


def test_leading_spaces_skipped():
    (record,) = parse_set_cookie("    a=1")
    assert (record.name, record.value) == ("a", "1")
