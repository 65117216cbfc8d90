"""Client-side error classes."""


class ApiClientError(Exception):
    """The API answered with an error envelope.

    Attributes:
        status_code: HTTP status code.
        code: Machine-readable error code from the envelope.
        message: Human-readable message from the envelope.
        details: Field-level details, if any.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class NotAuthenticatedError(ApiClientError):
    """A protected call was attempted with no stored token.

    Raised before any request is sent.
    """

    def __init__(self) -> None:
        super().__init__(401, "NOT_AUTHENTICATED", "Not logged in")


class SessionExpiredError(ApiClientError):
    """The server rejected the stored token (401).

    The stored session has already been cleared when this is raised; the
    caller must log in again.
    """

    def __init__(self, message: str = "Session expired, please log in again") -> None:
        super().__init__(401, "SESSION_EXPIRED", message)
