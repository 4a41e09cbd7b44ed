"""Input Validation — pure checks for registration and route payloads.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Every failing field contributes one message; messages are joined with ". "
    - Returned values are normalized (names stripped, email lower-cased)

Design Decisions:
    - Validation lives here, not in Pydantic schemas: services are called directly
      by tests and the editor, and must enforce the same rules as the HTTP layer
    - email-validator with deliverability checks off: syntax only, no DNS lookups
"""

from collections.abc import Sequence

from email_validator import EmailNotValidError, validate_email

from routesaver.core import messages
from routesaver.core.domain_types import (
    MIN_ROUTE_POINTS,
    PASSWORD_MIN_LENGTH,
    ROUTE_NAME_MAX_LENGTH,
    USER_NAME_MAX_LENGTH,
    Point,
)
from routesaver.core.errors import ValidationError


def validate_route(
    name: str | None, points: Sequence[Point] | None,
) -> tuple[str, list[Point]]:
    """Check a route name and point list for create/update (full replace)."""
    errors: list[str] = []
    clean_name = (name or "").strip()
    if not clean_name:
        errors.append(messages.ROUTE_NAME_REQUIRED)
    elif len(clean_name) > ROUTE_NAME_MAX_LENGTH:
        errors.append(messages.ROUTE_NAME_TOO_LONG)

    clean_points = list(points or [])
    if len(clean_points) < MIN_ROUTE_POINTS:
        errors.append(messages.ROUTE_MIN_POINTS)
    elif not all(_in_range(p) for p in clean_points):
        errors.append(messages.COORDINATE_INVALID)

    if errors:
        raise ValidationError(errors)
    return clean_name, clean_points


def validate_registration(
    name: str | None, email: str | None, password: str | None,
) -> tuple[str, str, str]:
    """Check registration fields. Returns (name, normalized email, password)."""
    if not name or not email or not password:
        raise ValidationError(messages.FILL_ALL_FIELDS)

    errors: list[str] = []
    clean_name = name.strip()
    if not clean_name:
        errors.append(messages.NAME_REQUIRED)
    elif len(clean_name) > USER_NAME_MAX_LENGTH:
        errors.append(messages.NAME_TOO_LONG)

    clean_email = normalize_email(email)
    try:
        validate_email(clean_email, check_deliverability=False)
    except EmailNotValidError:
        errors.append(messages.EMAIL_INVALID)

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(messages.PASSWORD_TOO_SHORT)

    if errors:
        raise ValidationError(errors)
    return clean_name, clean_email, password


def validate_login(email: str | None, password: str | None) -> tuple[str, str]:
    if not email or not password:
        raise ValidationError(messages.FILL_EMAIL_AND_PASSWORD)
    return normalize_email(email), password


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _in_range(point: Point) -> bool:
    return -90.0 <= point.lat <= 90.0 and -180.0 <= point.lng <= 180.0
