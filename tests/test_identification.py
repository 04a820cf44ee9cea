import pytest

from implantwarranty.identification import (
    IdentityError,
    is_valid_identity,
    is_valid_passport_number,
    is_valid_taiwan_id,
)


@pytest.mark.parametrize("value", ["A123456789", "a123456789", "AA00000009"])
def test_valid_taiwan_ids(value):
    assert is_valid_taiwan_id(value) == value


def test_taiwan_id_wrong_check_digit():
    with pytest.raises(IdentityError, match="check digit does not match"):
        is_valid_taiwan_id("A123456788")


def test_taiwan_id_wrong_length():
    with pytest.raises(IdentityError, match="must be 10 characters long"):
        is_valid_taiwan_id("A12345678")


def test_taiwan_id_bad_first_character():
    with pytest.raises(IdentityError, match="invalid first character"):
        is_valid_taiwan_id("1123456789")


def test_taiwan_id_bad_later_character():
    with pytest.raises(IdentityError, match="invalid character in Taiwan ID"):
        is_valid_taiwan_id("A12345678X")


def test_taiwan_id_not_a_string():
    with pytest.raises(IdentityError, match="must be a string"):
        is_valid_taiwan_id(1234567890)


@pytest.mark.parametrize("value", ["L898902C<3", "l898902c<3"])
def test_valid_passport_numbers(value):
    assert is_valid_passport_number(value) == value


@pytest.mark.parametrize("value", ["L898902C<4", "L898902C<X"])
def test_passport_wrong_check_digit(value):
    with pytest.raises(IdentityError, match="check digit does not match"):
        is_valid_passport_number(value)


def test_passport_wrong_length():
    with pytest.raises(IdentityError, match="must be 10 characters long"):
        is_valid_passport_number("L898902C3")


def test_passport_not_a_string():
    with pytest.raises(IdentityError, match="passport number must be a string"):
        is_valid_passport_number(None)


def test_identity_accepts_taiwan_id():
    assert is_valid_identity("A123456789") == "A123456789"


def test_identity_falls_back_to_passport():
    assert is_valid_identity("L898902C<3") == "L898902C<3"


def test_identity_reports_passport_error_when_both_fail():
    with pytest.raises(IdentityError, match="invalid passport number"):
        is_valid_identity("L898902C<4")


def test_identity_not_a_string():
    with pytest.raises(IdentityError, match="identity must be a string"):
        is_valid_identity(["A123456789"])