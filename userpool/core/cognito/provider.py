"""Identity provider capability and its boto3 implementation.

The pool talks to the provider through ``IdentityProvider``: one
callback-style method per operation plus a before-request event
subscription. ``BotoIdentityProvider`` implements it on a boto3
``cognito-idp`` client, running each call on a worker thread and reporting
completion through the callback.
"""
from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, MutableMapping, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from .exceptions import ProviderAPIError, error_for
from .models import CallOptions, ServiceResult

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 5
DEFAULT_MAX_WORKERS = 4

ServiceCallback = Callable[[ServiceResult], None]
BeforeRequestHandler = Callable[[str, MutableMapping[str, str]], None]


class IdentityProvider(Protocol):
    """Capability set the user pool needs from an identity provider.

    Each operation starts the call and returns immediately; completion is
    reported once through ``callback``, from whatever thread the transport
    chooses.
    """

    def sign_up(self, request: Any, callback: ServiceCallback,
                options: Optional[CallOptions] = None) -> None: ...

    def admin_create_user(self, request: Any, callback: ServiceCallback,
                          options: Optional[CallOptions] = None) -> None: ...

    def describe_user_pool(self, request: Any, callback: ServiceCallback,
                           options: Optional[CallOptions] = None) -> None: ...

    def describe_user_pool_client(self, request: Any, callback: ServiceCallback,
                                  options: Optional[CallOptions] = None) -> None: ...

    def confirm_forgot_password(self, request: Any, callback: ServiceCallback,
                                options: Optional[CallOptions] = None) -> None: ...

    def admin_get_user(self, request: Any, callback: ServiceCallback,
                       options: Optional[CallOptions] = None) -> None: ...

    def add_before_request_handler(self, handler: BeforeRequestHandler) -> None: ...


def to_provider_error(exc: ClientError) -> ProviderAPIError:
    """Translate a botocore ClientError into the matching typed exception."""
    error = exc.response.get("Error", {})
    code = error.get("Code", "UnknownError")
    message = error.get("Message", str(exc))
    status_code = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return error_for(code)(status_code, code, message, exc.operation_name)


class BotoIdentityProvider:
    """Callback-style identity provider backed by a boto3 ``cognito-idp`` client.

    Usage:
        provider = BotoIdentityProvider(region="us-east-1")
        provider.sign_up(request, callback)

    Requests are signed by botocore with the default credential chain
    (unsigned for the public SignUp/ConfirmForgotPassword operations).
    """

    def __init__(
        self,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
        client: Any = None,
    ):
        """Initialize the provider.

        Args:
            region: Region of the user pool
            endpoint_url: Optional endpoint override (e.g. a local emulator)
            timeout: Connect/read timeout in seconds
            max_workers: Worker threads running in-flight calls
            client: Optional pre-built cognito-idp client
        """
        if client is None:
            if not region and not endpoint_url:
                raise ValueError("Either region or endpoint_url is required")
            config = Config(connect_timeout=timeout, read_timeout=timeout)
            client = boto3.client("cognito-idp", region_name=region,
                                  endpoint_url=endpoint_url, config=config)
        self.client = client
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="userpool-provider")
        self._handlers: List[BeforeRequestHandler] = []
        self._lock = threading.Lock()

    def __enter__(self) -> "BotoIdentityProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Wait for in-flight calls, then release the worker pool and client."""
        self._executor.shutdown(wait=True)
        self.client.close()

    def add_before_request_handler(self, handler: BeforeRequestHandler) -> None:
        """Subscribe a hook called with (operation, headers) before each request is signed."""
        with self._lock:
            if handler in self._handlers:
                return
            self._handlers.append(handler)

        def before_sign(request, operation_name=None, **kwargs):
            handler(operation_name, request.headers)

        service = self.client.meta.service_model.service_id.hyphenize()
        self.client.meta.events.register(f"before-sign.{service}.*", before_sign)

    # Callback-style operations
    def sign_up(self, request, callback, options=None):
        self._submit("sign_up", request, callback)

    def admin_create_user(self, request, callback, options=None):
        self._submit("admin_create_user", request, callback)

    def describe_user_pool(self, request, callback, options=None):
        self._submit("describe_user_pool", request, callback)

    def describe_user_pool_client(self, request, callback, options=None):
        self._submit("describe_user_pool_client", request, callback)

    def confirm_forgot_password(self, request, callback, options=None):
        self._submit("confirm_forgot_password", request, callback)

    def admin_get_user(self, request, callback, options=None):
        self._submit("admin_get_user", request, callback)

    def _submit(self, method: str, request: Any, callback: ServiceCallback) -> None:
        self._executor.submit(self._run, method, request, callback)

    def _run(self, method: str, request: Any, callback: ServiceCallback) -> None:
        try:
            response = self.call(method, request.to_payload())
        except Exception as exc:
            callback(ServiceResult(request, exception=exc))
            return
        callback(ServiceResult(request, response=response))

    def call(self, method: str, payload: dict) -> dict:
        """Execute one provider operation synchronously.

        Args:
            method: boto3 client method name (e.g., "admin_get_user")
            payload: Operation parameters

        Returns:
            Response dict without ResponseMetadata

        Raises:
            ProviderAPIError: On provider-reported error (typed by error code)
            botocore.exceptions.BotoCoreError: On transport/credential failure
        """
        logger.debug("Dispatching %s", method)
        try:
            response = getattr(self.client, method)(**payload)
        except ClientError as exc:
            logger.debug("%s failed: %s", method, exc.response.get("Error", {}).get("Code"))
            raise to_provider_error(exc) from exc
        response.pop("ResponseMetadata", None)
        return response
