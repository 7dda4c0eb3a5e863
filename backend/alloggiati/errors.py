"""Domain error taxonomy.

Services raise these; ``alloggiati.main`` turns them into JSON responses.
Each error is recovered at the boundary of the request that triggered it.
"""

from fastapi import status


class RegistrationError(Exception):
    """Base class for errors raised by the registration services."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "registration_error"

    def __init__(self, message: str, *, redirect_to: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.redirect_to = redirect_to

    def to_dict(self) -> dict:
        body: dict = {"detail": self.message, "error": self.code}
        if self.redirect_to is not None:
            body["redirect_to"] = self.redirect_to
        return body


class DataAccessError(RegistrationError):
    """The data store could not be reached or rejected the query."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "data_access"

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["retryable"] = True
        return body


class AuthorizationError(RegistrationError):
    """Role or ownership mismatch."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NotFoundError(RegistrationError):
    """Referenced entity is absent or not in the expected state."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ValidationError(RegistrationError):
    """A required field is missing or malformed, or a precondition on the data fails."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation"

    def __init__(
        self,
        message: str,
        *,
        errors: dict[str, str] | None = None,
        redirect_to: str | None = None,
    ) -> None:
        super().__init__(message, redirect_to=redirect_to)
        self.errors = errors or {}

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body
