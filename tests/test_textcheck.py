import pytest

from implantwarranty.textcheck import (
    sanitize_string,
    validate_email,
    validate_password,
    validate_taiwan_phone,
)


@pytest.mark.parametrize(
    "email, expected",
    [
        ("user@example.com", True),
        ("first.last+tag@mail.example.com", True),
        ("user@example", False),
        ("user@@example.com", False),
        ("user@example.c", False),
        ("", False),
        ("user@example.com ", False),
    ],
)
def test_validate_email(email, expected):
    assert validate_email(email) is expected


@pytest.mark.parametrize(
    "phone, expected",
    [
        ("0900000000", True),
        ("0900-000-000", True),
        ("0900 000 000", True),
        ("0800000000", False),
        ("090000000", False),
        ("09000000001", False),
        ("09000000ab", False),
    ],
)
def test_validate_taiwan_phone(phone, expected):
    assert validate_taiwan_phone(phone) is expected


@pytest.mark.parametrize(
    "candidate, expected",
    [
        ("Abcdefg1", True),
        ("abcdefg!1", True),
        ("ABCDEFG!", False),
        ("abcdefgh", False),
        ("abcd1234", False),
        ("Ab1!", False),
        ("Abcdef!1", True),
    ],
)
def test_validate_password(candidate, expected):
    assert validate_password(candidate) is expected


def test_validate_password_counts_bytes_not_characters():
    # Four three-byte characters reach the length limit in bytes.
    assert validate_password("Aa1漢字") is True


def test_sanitize_removes_html_tags():
    assert sanitize_string("<b>Hello</b>") == "Hello"


def test_sanitize_removes_quotes_and_semicolons():
    assert sanitize_string("O'Brien; \"x\"") == "OBrien x"


def test_sanitize_removes_backslash_and_trims():
    assert sanitize_string("  a\\b  ") == "ab"


@pytest.mark.parametrize("text", ["<i>x</i>'; drop", "  plain  ", "a<b>c", ""])
def test_sanitize_is_idempotent(text):
    once = sanitize_string(text)
    assert sanitize_string(once) == once
    assert not any(char in once for char in "';\"\\")