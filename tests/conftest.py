"""Pytest shared fixtures for user pool tests."""
import pathlib
import sys
import threading
from typing import Any, Dict, List, Optional, Tuple

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from userpool.core.cognito import CognitoUserPool, ServiceResult


class StubProvider:
    """Recording identity provider that completes callbacks on demand.

    ``responses`` maps an operation name to a response dict or an exception
    instance. ``mode`` selects how completion is delivered:
    "inline" (on the caller's thread), "thread" (from a worker thread) or
    "twice" (callback fired twice, first with the configured outcome).
    """

    OPERATIONS = (
        "sign_up",
        "admin_create_user",
        "describe_user_pool",
        "describe_user_pool_client",
        "confirm_forgot_password",
        "admin_get_user",
    )

    def __init__(self, responses: Optional[Dict[str, Any]] = None, mode: str = "inline"):
        self.responses = dict(responses or {})
        self.mode = mode
        self.calls: List[Tuple[str, Any]] = []
        self.handlers: List[Any] = []

    def add_before_request_handler(self, handler):
        self.handlers.append(handler)

    def calls_for(self, operation: str) -> List[Any]:
        return [request for name, request in self.calls if name == operation]

    def _complete(self, operation, request, callback):
        self.calls.append((operation, request))
        outcome = self.responses.get(operation, {})
        if isinstance(outcome, BaseException):
            result = ServiceResult(request, exception=outcome)
        else:
            result = ServiceResult(request, response=outcome)

        if self.mode == "thread":
            worker = threading.Thread(target=callback, args=(result,))
            worker.start()
            worker.join()
        elif self.mode == "twice":
            callback(result)
            callback(ServiceResult(request, response={"duplicate": True}))
        else:
            callback(result)

    def __getattr__(self, name):
        if name in self.OPERATIONS:
            def operation(request, callback, options=None):
                self._complete(name, request, callback)
            return operation
        raise AttributeError(name)


@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def make_pool():
    """Factory building a pool around a fresh StubProvider."""
    def _make(client_secret=None, responses=None, mode="inline", pool_id="us-east-1_abc123"):
        provider = StubProvider(responses, mode=mode)
        return CognitoUserPool(pool_id, "client1", provider, client_secret), provider
    return _make
