"""Tests for the error hierarchy and failure envelope."""

from app.core.errors import (
    AppError, ConflictError, DatabaseError, ForbiddenError, NotFoundError,
    ServerMisconfiguredError, ValidationError,
)


def test_envelope_shape():
    body = NotFoundError("Job not found").to_response("abc-123")
    assert body == {
        "success": False,
        "error": "NotFoundError",
        "message": "Job not found",
        "code": "NOT_FOUND",
        "correlationId": "abc-123",
    }


def test_details_only_when_present():
    details = [{"field": "phone", "message": "bad"}]
    body = ValidationError(details=details).to_response("cid")
    assert body["details"] == details
    assert body["message"] == "Invalid request data"
    assert "details" not in ConflictError().to_response("cid")


def test_statuses():
    assert ForbiddenError().http_status == 403
    assert ConflictError().http_status == 409
    assert NotFoundError().http_status == 404


def test_database_error_carries_taxonomy_status():
    assert DatabaseError("Maximum 10 education entries allowed", 400).http_status == 400
    assert DatabaseError().http_status == 500


def test_all_errors_are_app_errors():
    assert isinstance(ServerMisconfiguredError(), AppError)
    assert ServerMisconfiguredError().code == "SERVER_MISCONFIGURED"
