"""Identity-provider exceptions for error handling."""
from __future__ import annotations
from typing import Optional


class IdentityProviderError(Exception):
    """Base exception for all user pool operations."""
    pass


class ProviderAPIError(IdentityProviderError):
    """Error reported by the identity provider API.

    Attributes:
        status_code: HTTP status code (None when not known)
        error_type: Provider error type (e.g. UserNotFoundException)
        message: Error message from response
        operation: Provider operation that failed
    """

    def __init__(self, status_code: Optional[int], error_type: str, message: str, operation: str):
        self.status_code = status_code
        self.error_type = error_type
        self.message = message
        self.operation = operation
        super().__init__(f"[{status_code}] {operation} {error_type}: {message}")


class UserNotFoundError(ProviderAPIError):
    """User lookup failed - username does not exist in the pool."""
    pass


class UsernameExistsError(ProviderAPIError):
    """User creation failed - username already exists."""
    pass


class InvalidPasswordError(ProviderAPIError):
    """Password does not conform to the pool password policy."""
    pass


class InvalidParameterError(ProviderAPIError):
    """Request parameter rejected by the provider."""
    pass


class NotAuthorizedError(ProviderAPIError):
    """Caller is not authorized (bad secret hash, credentials or client)."""
    pass


class CodeMismatchError(ProviderAPIError):
    """Confirmation code does not match."""
    pass


class ExpiredCodeError(ProviderAPIError):
    """Confirmation code has expired."""
    pass


class ResourceNotFoundError(ProviderAPIError):
    """User pool or app client does not exist."""
    pass


class TooManyRequestsError(ProviderAPIError):
    """Request rate exceeded."""
    pass


class LimitExceededError(ProviderAPIError):
    """Per-user attempt limit exceeded."""
    pass


class OperationCancelledError(IdentityProviderError):
    """Operation was cancelled before the provider was contacted."""
    pass


_ERROR_TYPES = {
    "UserNotFoundException": UserNotFoundError,
    "UsernameExistsException": UsernameExistsError,
    "InvalidPasswordException": InvalidPasswordError,
    "InvalidParameterException": InvalidParameterError,
    "NotAuthorizedException": NotAuthorizedError,
    "CodeMismatchException": CodeMismatchError,
    "ExpiredCodeException": ExpiredCodeError,
    "ResourceNotFoundException": ResourceNotFoundError,
    "TooManyRequestsException": TooManyRequestsError,
    "LimitExceededException": LimitExceededError,
}


def error_for(error_type: str) -> type[ProviderAPIError]:
    """Return the exception class for a provider error type.

    Accepts both the bare name and the namespaced form
    (``com.amazonaws.cognito#UserNotFoundException``).
    """
    name = error_type.rsplit("#", 1)[-1].split(":", 1)[0]
    return _ERROR_TYPES.get(name, ProviderAPIError)
