"""
Validation rules for bookmark write payloads.

Create and update payloads are checked against ordered lists of named rules. Rules are
evaluated in order and the first failing rule decides the error, so the order of each
list is part of the public API: clients see the message of the earliest broken rule.

Payloads are raw decoded JSON objects, so values may be of any JSON type. Presence
follows the truthiness rules the bookmark API was originally defined against: null,
false, 0, NaN and "" count as absent.
"""
import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import (
    BookmarkValidationError,
    EmptyUpdateError,
    InvalidFieldTypeError,
    InvalidRatingError,
    InvalidUrlSchemeError,
    MissingRequiredFieldError,
)

logger = logging.getLogger(__name__)

ALLOWED_URL_PREFIXES = ("http://", "https://")
TEXT_FIELDS = ("title", "description", "url")
UPDATABLE_FIELDS = ("title", "description", "url", "rating")

# Ratings are accepted in [MIN_RATING, RATING_UPPER_BOUND) and floored before storage.
MIN_RATING = 1
RATING_UPPER_BOUND = 6


def is_present(value: Any) -> bool:
    """Return True if the value counts as supplied (not null, false, 0, NaN or "")."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, int | float):
        # NaN is the only value that isn't equal to itself
        return value == value and value != 0
    return True


def is_number(value: Any) -> bool:
    """Return True for int/float values; booleans are not numbers here."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def has_allowed_scheme(url: str) -> bool:
    """Check the literal, case-sensitive http:// or https:// prefix."""
    return url.startswith(ALLOWED_URL_PREFIXES)


def is_valid_rating(value: Any) -> bool:
    """Type check first, then range check, so non-numbers never reach a comparison."""
    if not is_number(value):
        return False
    return MIN_RATING <= value < RATING_UPPER_BOUND


@dataclass(frozen=True)
class Rule:
    """A named predicate over a payload and the error raised when it fails."""

    name: str
    check: Callable[[Mapping[str, Any]], bool]
    error: Callable[[], BookmarkValidationError]


def _text_field_rule(field: str, *, optional: bool) -> Rule:
    """
    Build a rule requiring a field to be a string.

    With optional=True a null/absent value passes (create: description). Otherwise the
    field must be a string whenever the rule runs.
    """
    def check(fields: Mapping[str, Any]) -> bool:
        value = fields.get(field)
        if optional and value is None:
            return True
        return isinstance(value, str)

    return Rule(f"{field}_is_string", check, lambda: InvalidFieldTypeError(field))


def _supplied_text_rule(field: str) -> Rule:
    """Build an update rule: a supplied text field must be a string."""
    def check(fields: Mapping[str, Any]) -> bool:
        value = fields.get(field)
        return not is_present(value) or isinstance(value, str)

    return Rule(f"{field}_is_string", check, lambda: InvalidFieldTypeError(field))


def _rating_supplied(fields: Mapping[str, Any]) -> bool:
    """In an update, rating is supplied whenever it is given a non-null value."""
    return fields.get("rating") is not None


CREATE_RULES: tuple[Rule, ...] = (
    Rule(
        "required_fields_present",
        lambda f: all(is_present(f.get(name)) for name in ("title", "url", "rating")),
        MissingRequiredFieldError,
    ),
    _text_field_rule("title", optional=False),
    _text_field_rule("description", optional=True),
    _text_field_rule("url", optional=False),
    Rule("url_scheme", lambda f: has_allowed_scheme(f["url"]), InvalidUrlSchemeError),
    Rule("rating_range", lambda f: is_valid_rating(f["rating"]), InvalidRatingError),
)

UPDATE_RULES: tuple[Rule, ...] = (
    Rule(
        "any_field_present",
        lambda f: any(is_present(f.get(name)) for name in UPDATABLE_FIELDS),
        EmptyUpdateError,
    ),
    *(_supplied_text_rule(name) for name in TEXT_FIELDS),
    Rule(
        "url_scheme",
        lambda f: not is_present(f.get("url")) or has_allowed_scheme(f["url"]),
        InvalidUrlSchemeError,
    ),
    Rule(
        "rating_range",
        lambda f: not _rating_supplied(f) or is_valid_rating(f["rating"]),
        InvalidRatingError,
    ),
)


def run_rules(rules: tuple[Rule, ...], fields: Mapping[str, Any]) -> None:
    """
    Evaluate rules in order, raising the error of the first one that fails.

    Raises:
        BookmarkValidationError: The tagged error of the first failing rule.
    """
    for rule in rules:
        if not rule.check(fields):
            logger.info("Bookmark payload rejected by rule '%s'", rule.name)
            raise rule.error()


def validate_create(fields: Mapping[str, Any]) -> BookmarkCreate:
    """
    Validate a create payload and return its normalized fields.

    Args:
        fields: The decoded request body. It is not modified.

    Returns:
        BookmarkCreate with the rating floored to an integer.

    Raises:
        BookmarkValidationError: If any create rule fails.
    """
    run_rules(CREATE_RULES, fields)
    return BookmarkCreate(
        title=fields["title"],
        url=fields["url"],
        description=fields.get("description"),
        rating=math.floor(fields["rating"]),
    )


def validate_update(fields: Mapping[str, Any]) -> BookmarkUpdate:
    """
    Validate a partial update payload and return only the supplied fields.

    Text fields are supplied when present (see `is_present`); rating is supplied when it
    has a non-null value. Unsupplied fields are left unset on the returned schema so they
    are never written.

    Args:
        fields: The decoded request body. It is not modified.

    Returns:
        BookmarkUpdate with only the supplied fields set.

    Raises:
        BookmarkValidationError: If any update rule fails.
    """
    run_rules(UPDATE_RULES, fields)
    supplied: dict[str, Any] = {
        name: fields[name] for name in TEXT_FIELDS if is_present(fields.get(name))
    }
    if _rating_supplied(fields):
        supplied["rating"] = math.floor(fields["rating"])
    return BookmarkUpdate(**supplied)
