"""API error classes.

Every failure a client can see is one of these. Exception handlers in
tasktrack.main translate them into the {"error": {...}} envelope with the
matching HTTP status.

Taxonomy:
- ValidationError (422): malformed or missing input, field-level details
- EmailTakenError (422): registration with an already registered email
- InvalidCredentialsError (401): login failure, deliberately generic
- UnauthorizedError (401): no or invalid credential on a protected route
- ForbiddenError (403): authenticated but not the resource owner
- NotFoundError (404): resource id does not exist
- InternalError (500): anything unexpected
"""


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.
    Subclasses set default status_code.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional list of additional error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (422).

    Details are field-level entries: {"field", "message", "type"}.
    """

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        *,
        code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details,
        )


class EmailTakenError(ValidationError):
    """Registration email is already in use (422).

    Separate code so callers can tell a taken email apart from a
    malformed one.
    """

    def __init__(self) -> None:
        super().__init__(
            "The email has already been taken.",
            details=[
                {
                    "field": "email",
                    "message": "The email has already been taken.",
                    "type": "unique",
                }
            ],
            code="EMAIL_ALREADY_EXISTS",
        )


class InvalidCredentialsError(APIError):
    """Login failed (401).

    Same code and message whether the email is unknown or the password
    is wrong.
    """

    def __init__(self) -> None:
        super().__init__(
            code="INVALID_CREDENTIALS",
            message="The provided credentials are incorrect.",
            status_code=401,
        )


class UnauthorizedError(APIError):
    """Authentication required (401).

    Use when no valid bearer token or session cookie was provided.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class ForbiddenError(APIError):
    """Not allowed to access resource (403).

    Use when auth is valid but the user does not own the resource.
    """

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            code="FORBIDDEN",
            message=message,
            status_code=403,
        )


class NotFoundError(APIError):
    """Resource not found (404).

    Raised only when the id does not exist at all. A resource that exists
    but belongs to someone else raises ForbiddenError instead.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )


class InternalError(APIError):
    """Unexpected server error (500).

    Use for unhandled exceptions. Never expose stack traces to clients.
    """

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
        )
