"""User pool client library.

This package provides an awaitable interface to user pool operations on a
callback-style identity provider.

Architecture:
- invoker.py: Callback-to-future bridge (one-shot asyncio futures)
- pool.py: User pool operations (sign-up, admin create, lookup, policy, reset)
- provider.py: Provider capability protocol and boto3 implementation
- models.py: Request/response value objects
- helpers.py: Attribute marshalling, secret hash, user-agent hook
- user.py: User value
- exceptions.py: Typed exceptions for error handling

Usage:
    from userpool.core.cognito import CognitoUserPool, BotoIdentityProvider

    provider = BotoIdentityProvider(region="us-east-1")
    pool = CognitoUserPool("us-east-1_abc123", "client1", provider)
    user = await pool.find_by_id("alice")
"""
from .exceptions import (
    IdentityProviderError,
    ProviderAPIError,
    UserNotFoundError,
    UsernameExistsError,
    InvalidPasswordError,
    InvalidParameterError,
    NotAuthorizedError,
    CodeMismatchError,
    ExpiredCodeError,
    ResourceNotFoundError,
    TooManyRequestsError,
    LimitExceededError,
    OperationCancelledError,
    error_for,
)
from .helpers import (
    create_attribute_list,
    attributes_to_dict,
    get_secret_hash,
    user_agent_handler,
)
from .invoker import AsyncServiceInvoker, invoke_service
from .models import (
    AttributeType,
    CallOptions,
    ServiceResult,
    SignUpRequest,
    AdminCreateUserRequest,
    AdminGetUserRequest,
    DescribeUserPoolRequest,
    DescribeUserPoolClientRequest,
    ConfirmForgotPasswordRequest,
    PasswordPolicy,
    ClientConfiguration,
)
from .provider import IdentityProvider, BotoIdentityProvider, REQUEST_TIMEOUT
from .user import CognitoUser
from .pool import CognitoUserPool

__all__ = [
    # Pool
    "CognitoUserPool",
    "CognitoUser",

    # Provider
    "IdentityProvider",
    "BotoIdentityProvider",
    "REQUEST_TIMEOUT",

    # Invoker
    "AsyncServiceInvoker",
    "invoke_service",

    # Exceptions
    "IdentityProviderError",
    "ProviderAPIError",
    "UserNotFoundError",
    "UsernameExistsError",
    "InvalidPasswordError",
    "InvalidParameterError",
    "NotAuthorizedError",
    "CodeMismatchError",
    "ExpiredCodeError",
    "ResourceNotFoundError",
    "TooManyRequestsError",
    "LimitExceededError",
    "OperationCancelledError",
    "error_for",

    # Models
    "AttributeType",
    "CallOptions",
    "ServiceResult",
    "SignUpRequest",
    "AdminCreateUserRequest",
    "AdminGetUserRequest",
    "DescribeUserPoolRequest",
    "DescribeUserPoolClientRequest",
    "ConfirmForgotPasswordRequest",
    "PasswordPolicy",
    "ClientConfiguration",

    # Helpers
    "create_attribute_list",
    "attributes_to_dict",
    "get_secret_hash",
    "user_agent_handler",
]
