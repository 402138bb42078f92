"""Tests for input validation helpers."""

import pytest

from asiste_api.errors import ValidationError
from asiste_api.services.validation import (
    parse_rating,
    require_fields,
    validate_comment,
    validate_email,
    validate_postal_code,
    validate_slug,
)


class TestRequireFields:
    def test_passes_when_all_present(self):
        require_fields({"name": "Ana", "email": "a@b.com"}, ["name", "email"])

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_counts_as_missing(self, value):
        with pytest.raises(ValidationError) as exc_info:
            require_fields({"name": value, "email": "a@b.com"}, ["name", "email"])
        assert exc_info.value.to_body() == {
            "error": "Missing required fields",
            "required": ["name", "email"],
        }


@pytest.mark.parametrize("email", ["a@b.com", "ana.lopez@clinic.example.es"])
def test_valid_emails(email):
    validate_email(email)


@pytest.mark.parametrize("email", ["ab.com", "a@b", "a b@c.com", "a@b.com\n", "@b.com"])
def test_invalid_emails(email):
    with pytest.raises(ValidationError, match="Invalid email format"):
        validate_email(email)


@pytest.mark.parametrize("code", ["280", "280011", "2800a", "28001\n", ""])
def test_postal_code_must_be_five_digits(code):
    with pytest.raises(ValidationError, match="5 digits"):
        validate_postal_code(code)


def test_postal_code_accepts_five_digits():
    validate_postal_code("28001")


@pytest.mark.parametrize("value,expected", [(1, 1), (5, 5), ("3", 3), (" 4 ", 4)])
def test_parse_rating_accepts_numbers_and_numeric_strings(value, expected):
    assert parse_rating(value) == expected


@pytest.mark.parametrize("value", [0, 6, -1, "abc", "", "4.5"])
def test_parse_rating_rejects_out_of_range(value):
    with pytest.raises(ValidationError, match="between 1 and 5"):
        parse_rating(value)


def test_comment_length_bounds():
    validate_comment("x" * 10)
    validate_comment("x" * 1000)
    with pytest.raises(ValidationError, match="at least 10"):
        validate_comment("x" * 9)
    with pytest.raises(ValidationError, match="at most 1000"):
        validate_comment("x" * 1001)


@pytest.mark.parametrize("slug", ["a", "my-post-slug", "post-2026"])
def test_valid_slugs(slug):
    validate_slug(slug)


@pytest.mark.parametrize("slug", ["My-Post", "-post", "post-", "a--b", "a b", "a/b"])
def test_invalid_slugs(slug):
    with pytest.raises(ValidationError):
        validate_slug(slug)
