"""Error Hierarchy — verifies status codes, envelopes and log fields.

Tests:
    - Each error class maps to its HTTP status
    - to_response never leaks internal details for 5xx errors
"""

import pytest

from routesaver.core import messages
from routesaver.core.errors import (
    Conflict, DatabaseError, ErrorCategory, ErrorContext, ExternalServiceError,
    InternalError, NotFound, RouteSaverError, Unauthorized, ValidationError,
)


@pytest.mark.parametrize("error, status", [
    (ValidationError("x"), 400),
    (Unauthorized("x"), 401),
    (NotFound(), 404),
    (Conflict("x"), 409),
    (InternalError(), 500),
    (ExternalServiceError("OSRM", "down"), 502),
    (DatabaseError("gone", "execute"), 503),
])
def test_http_status(error, status):
    assert isinstance(error, RouteSaverError)
    assert error.http_status == status


def test_not_found_default_message():
    assert NotFound().to_response() == {
        "success": False, "message": messages.ROUTE_NOT_FOUND,
    }


def test_database_error_hides_details():
    error = DatabaseError("password authentication failed", "connect")
    assert error.to_response()["message"] == messages.INTERNAL_ERROR
    assert error.category == ErrorCategory.DATABASE


def test_external_service_error_names_service():
    error = ExternalServiceError("Nominatim", "timeout")
    assert error.service == "Nominatim"
    assert error.message == "Nominatim error: timeout"


def test_log_extra_carries_context():
    error = NotFound(context=ErrorContext(user_id="u1", route_id="r1"))
    assert error.log_extra() == {
        "error_code": "RESOURCE_NOT_FOUND", "user_id": "u1", "route_id": "r1",
    }
