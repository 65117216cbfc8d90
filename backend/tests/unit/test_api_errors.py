"""Tests for API error classes."""

from tasktrack.core.errors import (
    APIError,
    EmailTakenError,
    ForbiddenError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


class TestAPIError:
    """Tests for base APIError class."""

    def test_api_error_has_required_attributes(self):
        """APIError should have code, message, status_code, details."""
        error = APIError(
            code="TEST_ERROR",
            message="Test message",
            status_code=418,
            details=[{"field": "test"}],
        )
        assert error.code == "TEST_ERROR"
        assert error.message == "Test message"
        assert error.status_code == 418
        assert error.details == [{"field": "test"}]

    def test_api_error_defaults_to_500(self):
        """APIError should default to 500 status code."""
        error = APIError(code="TEST", message="Test")
        assert error.status_code == 500
        assert error.details is None

    def test_api_error_str_is_message(self):
        error = APIError(code="TEST", message="Test")
        assert str(error) == "Test"


class TestValidationError:
    """Tests for ValidationError (422)."""

    def test_validation_error_code_and_status(self):
        error = ValidationError("Validation failed")
        assert error.code == "VALIDATION_ERROR"
        assert error.status_code == 422

    def test_validation_error_with_details(self):
        details = [{"field": "email", "message": "invalid", "type": "email"}]
        error = ValidationError("Validation failed", details=details)
        assert error.details == details


class TestEmailTakenError:
    """Tests for EmailTakenError (422, distinct code)."""

    def test_is_a_validation_error_with_own_code(self):
        error = EmailTakenError()
        assert isinstance(error, ValidationError)
        assert error.code == "EMAIL_ALREADY_EXISTS"
        assert error.status_code == 422

    def test_details_name_the_email_field(self):
        error = EmailTakenError()
        assert error.details == [
            {
                "field": "email",
                "message": "The email has already been taken.",
                "type": "unique",
            }
        ]


class TestAuthErrors:
    """Tests for 401/403 errors."""

    def test_invalid_credentials_is_generic_401(self):
        error = InvalidCredentialsError()
        assert error.status_code == 401
        assert error.code == "INVALID_CREDENTIALS"
        assert error.message == "The provided credentials are incorrect."

    def test_unauthorized_default_message(self):
        error = UnauthorizedError()
        assert error.status_code == 401
        assert error.code == "UNAUTHORIZED"
        assert error.message == "Authentication required"

    def test_forbidden_default_message(self):
        error = ForbiddenError()
        assert error.status_code == 403
        assert error.code == "FORBIDDEN"
        assert error.message == "Access denied"


class TestNotFoundError:
    """Tests for NotFoundError (404)."""

    def test_message_with_id(self):
        error = NotFoundError("Todo", "abc")
        assert error.status_code == 404
        assert error.message == "Todo with id 'abc' not found"

    def test_message_without_id(self):
        assert NotFoundError("Todo").message == "Todo not found"


class TestInternalError:
    def test_internal_error_defaults(self):
        error = InternalError()
        assert error.status_code == 500
        assert error.code == "INTERNAL_ERROR"
        assert error.message == "An unexpected error occurred"
