"""User pool operations on top of a callback-style identity provider."""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from .exceptions import OperationCancelledError, UserNotFoundError
from .helpers import attributes_to_dict, create_attribute_list, get_secret_hash, user_agent_handler
from .invoker import AsyncServiceInvoker
from .models import (
    AdminCreateUserRequest,
    AdminGetUserRequest,
    ClientConfiguration,
    ConfirmForgotPasswordRequest,
    DescribeUserPoolClientRequest,
    DescribeUserPoolRequest,
    PasswordPolicy,
    SignUpRequest,
)
from .provider import IdentityProvider
from .user import CognitoUser

logger = logging.getLogger(__name__)


class CognitoUserPool(AsyncServiceInvoker):
    """A user pool and one of its app clients.

    Usage:
        pool = CognitoUserPool("us-east-1_abc123", "client1", provider)
        await pool.sign_up("bob", "Pwd1234!", {"email": "bob@x.com"})
        user = await pool.find_by_id("bob")
    """

    def __init__(self, pool_id: str, client_id: str, provider: IdentityProvider,
                 client_secret: Optional[str] = None):
        """Initialize the user pool.

        Args:
            pool_id: Pool id of the form <region>_<poolname>
            client_id: App client id within the pool
            provider: Identity provider handle (not owned by the pool)
            client_secret: App client secret, if the client has one

        Raises:
            ValueError: If pool_id has no region separator
        """
        if "_" not in pool_id:
            raise ValueError("pool_id should be of the form <region>_<poolname>.")

        self._pool_id = pool_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._client_configuration: Optional[ClientConfiguration] = None
        self.provider = provider

        provider.add_before_request_handler(user_agent_handler)

    @property
    def pool_id(self) -> str:
        return self._pool_id

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def client_secret(self) -> Optional[str]:
        return self._client_secret

    @property
    def region(self) -> str:
        return self._pool_id.split("_", 1)[0]

    def _secret_hash(self, user_id: str) -> Optional[str]:
        if not self._client_secret:
            return None
        return get_secret_hash(user_id, self._client_id, self._client_secret)

    # ─────────────────────────────────────────────────────────────────────
    # Registration
    # ─────────────────────────────────────────────────────────────────────
    def sign_up(self, user_id: str, password: str, user_attributes: Optional[Mapping[str, Any]],
                validation_data: Optional[Mapping[str, Any]] = None) -> "asyncio.Future[Dict[str, Any]]":
        """Sign up a user; returns a future of the delivery details response.

        Args:
            user_id: Username of the user being created
            password: Password of the user being created
            user_attributes: User attributes (required)
            validation_data: Optional validation data passed to pool triggers

        Raises:
            ValueError: If user_id is empty or user_attributes is None
        """
        request = self._create_sign_up_request(user_id, password, user_attributes, validation_data)
        logger.debug("Sign-up request built for pool %s", self._pool_id)
        return self._invoke_service(self.provider.sign_up, request)

    def _create_sign_up_request(self, user_id: str, password: str,
                                user_attributes: Optional[Mapping[str, Any]],
                                validation_data: Optional[Mapping[str, Any]]) -> SignUpRequest:
        if not user_id:
            raise ValueError("user_id is required")
        if user_attributes is None:
            raise ValueError("user_attributes cannot be None.")

        return SignUpRequest(
            client_id=self._client_id,
            username=user_id,
            password=password,
            user_attributes=create_attribute_list(user_attributes),
            validation_data=create_attribute_list(validation_data) if validation_data is not None else None,
            secret_hash=self._secret_hash(user_id),
        )

    def admin_sign_up(self, user_id: str, user_attributes: Optional[Mapping[str, Any]],
                      validation_data: Optional[Mapping[str, Any]] = None) -> "asyncio.Future[Dict[str, Any]]":
        """Create a user administratively; the provider sends a temporary password.

        Raises:
            ValueError: If user_id is empty or user_attributes is None
        """
        request = self._create_admin_sign_up_request(user_id, user_attributes, validation_data)
        logger.debug("Admin create-user request built for pool %s", self._pool_id)
        return self._invoke_service(self.provider.admin_create_user, request)

    def _create_admin_sign_up_request(self, user_id: str,
                                      user_attributes: Optional[Mapping[str, Any]],
                                      validation_data: Optional[Mapping[str, Any]]) -> AdminCreateUserRequest:
        if not user_id:
            raise ValueError("user_id is required")
        if user_attributes is None:
            raise ValueError("user_attributes cannot be None.")

        return AdminCreateUserRequest(
            user_pool_id=self._pool_id,
            username=user_id,
            user_attributes=create_attribute_list(user_attributes),
            validation_data=create_attribute_list(validation_data) if validation_data is not None else None,
            secret_hash=self._secret_hash(user_id),
        )

    # ─────────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────────
    def get_user(self, user_id: Optional[str] = None, status: Optional[str] = None,
                 attributes: Optional[Dict[str, Any]] = None) -> CognitoUser:
        """Build a user of this pool without contacting the provider."""
        if not user_id:
            return CognitoUser(None, self._client_id, self, self.provider, self._client_secret)

        if status is None and attributes is None:
            return CognitoUser(user_id, self._client_id, self, self.provider, self._client_secret)

        return CognitoUser(user_id, self._client_id, self, self.provider, self._client_secret,
                           status=status, username=user_id, attributes=dict(attributes or {}))

    async def find_by_id(self, user_id: str) -> Optional[CognitoUser]:
        """Look up a user by username.

        Returns:
            The user with status and attributes, or None if the pool has no such user

        Raises:
            ValueError: If user_id is empty
        """
        if not user_id:
            raise ValueError("user_id is required")

        request = AdminGetUserRequest(user_pool_id=self._pool_id, username=user_id)
        try:
            response = await self._invoke_service(self.provider.admin_get_user, request)
        except UserNotFoundError:
            logger.debug("User lookup in pool %s found no user", self._pool_id)
            return None

        username = response.get("Username")
        return CognitoUser(username, self._client_id, self, self.provider, self._client_secret,
                           status=response.get("UserStatus"), username=username,
                           attributes=attributes_to_dict(response.get("UserAttributes")))

    # ─────────────────────────────────────────────────────────────────────
    # Pool and client configuration
    # ─────────────────────────────────────────────────────────────────────
    async def get_password_policy(self) -> PasswordPolicy:
        """Fetch the pool's password policy (always queries the provider)."""
        response = await self._invoke_service(
            self.provider.describe_user_pool, DescribeUserPoolRequest(user_pool_id=self._pool_id)
        )
        policy = response.get("UserPool", {}).get("Policies", {}).get("PasswordPolicy", {})
        return PasswordPolicy.from_dict(policy)

    async def get_client_configuration(self) -> ClientConfiguration:
        """Return the app client's readable/writable attributes.

        Fetched once and cached for the lifetime of the pool. The cache is
        filled without locking: concurrent first calls may each query the
        provider, and all of them store equal values.
        """
        if self._client_configuration is None:
            response = await self._invoke_service(
                self.provider.describe_user_pool_client,
                DescribeUserPoolClientRequest(user_pool_id=self._pool_id, client_id=self._client_id),
            )
            client = response.get("UserPoolClient", {})
            self._client_configuration = ClientConfiguration.from_lists(
                client.get("ReadAttributes"), client.get("WriteAttributes")
            )
            logger.info("Cached client configuration for client %s", self._client_id)

        return self._client_configuration

    # ─────────────────────────────────────────────────────────────────────
    # Password reset
    # ─────────────────────────────────────────────────────────────────────
    def confirm_forgot_password(self, user_id: str, token: str, new_password: str,
                                cancel_event: Any = None) -> "asyncio.Future[Dict[str, Any]]":
        """Reset a user's password after validating the reset token.

        Args:
            user_id: User whose password should be reset
            token: Password reset confirmation code
            new_password: New password to set
            cancel_event: Optional event (``is_set()``) checked once, before the call

        Raises:
            OperationCancelledError: If cancel_event is already set
            ValueError: If user_id is empty
        """
        if cancel_event is not None and cancel_event.is_set():
            logger.warning("Password reset cancelled before contacting the provider")
            raise OperationCancelledError("confirm_forgot_password cancelled")
        if not user_id:
            raise ValueError("user_id is required")

        request = ConfirmForgotPasswordRequest(
            client_id=self._client_id,
            username=user_id,
            confirmation_code=token,
            password=new_password,
            secret_hash=self._secret_hash(user_id),
        )

        # TODO: pass cancel_event to the provider once BotoIdentityProvider can abort in-flight calls.
        return self._invoke_service(self.provider.confirm_forgot_password, request)
