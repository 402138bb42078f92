"""Input checks shared by the create/update paths."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from asiste_api.errors import ValidationError

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
POSTAL_CODE_RE = re.compile(r"\d{5}")
SLUG_RE = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")

RATING_MIN, RATING_MAX = 1, 5
COMMENT_MIN, COMMENT_MAX = 10, 1000


def is_blank(value: Any) -> bool:
    """True for None and for strings with no visible characters."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(values: Mapping[str, Any], required: Sequence[str]) -> None:
    """Reject the request if any required field is missing or empty.

    ``values`` is keyed by wire (camelCase) names so the ``required`` list
    echoed back to the client matches what it sends.
    """
    if any(is_blank(values.get(field)) for field in required):
        raise ValidationError("Missing required fields", required=list(required))


def validate_email(email: str) -> None:
    if not EMAIL_RE.fullmatch(email):
        raise ValidationError("Invalid email format")


def validate_postal_code(postal_code: str) -> None:
    if not POSTAL_CODE_RE.fullmatch(postal_code):
        raise ValidationError("Postal code must be 5 digits")


def parse_rating(value: int | str) -> int:
    """Return the rating as an int in [1, 5]; numeric strings are accepted."""
    try:
        rating = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Rating must be between 1 and 5") from None
    if not RATING_MIN <= rating <= RATING_MAX:
        raise ValidationError("Rating must be between 1 and 5")
    return rating


def validate_comment(comment: str) -> None:
    if len(comment) < COMMENT_MIN:
        raise ValidationError(
            f"Comment must be at least {COMMENT_MIN} characters long"
        )
    if len(comment) > COMMENT_MAX:
        raise ValidationError(f"Comment must be at most {COMMENT_MAX} characters")


def validate_slug(slug: str) -> None:
    if not SLUG_RE.fullmatch(slug):
        raise ValidationError(
            "Slug may only contain lowercase letters, digits and single hyphens"
        )
