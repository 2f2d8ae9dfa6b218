"""Callback-to-future bridge for provider operations.

Provider operations follow the callback style: they start the remote call,
return immediately, and report completion later through
``callback(ServiceResult)``, possibly from a transport worker thread. This
module wraps such an operation in an ``asyncio.Future`` that an ``async``
caller can await.

Cancellation is not propagated: cancelling the awaiting task does not stop
the underlying call, which runs to completion or timeout and whose result
is then dropped.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Optional, TypeVar

from .models import CallOptions, ServiceResult

logger = logging.getLogger(__name__)

TRequest = TypeVar("TRequest")
TResponse = TypeVar("TResponse")

ServiceCallback = Callable[[ServiceResult], None]
ServiceMethod = Callable[[Any, ServiceCallback, Optional[CallOptions]], None]


def _resolve(future: asyncio.Future, result: ServiceResult) -> None:
    """Write the outcome to the future; first writer wins."""
    if future.done():
        if not future.cancelled():
            logger.debug("Ignoring duplicate completion for %s", type(result.request).__name__)
        return
    if result.exception is not None:
        future.set_exception(result.exception)
    else:
        future.set_result(result.response)


def invoke_service(service_method: ServiceMethod, request: TRequest,
                   options: Optional[CallOptions] = None) -> "asyncio.Future[TResponse]":
    """Invoke a callback-style provider operation and return an awaitable future.

    Must be called from a coroutine (or callback) running on an event loop;
    the returned future belongs to that loop.

    Args:
        service_method: Provider operation accepting (request, callback, options)
        request: Request value for the operation
        options: Optional per-call options forwarded to the operation

    Returns:
        Future resolved with the response, or failed with the reported fault
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()

    def callback(result: ServiceResult) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            _resolve(future, result)
            return

        try:
            loop.call_soon_threadsafe(_resolve, future, result)
        except RuntimeError:
            # Loop already closed: nobody is left to await this result.
            logger.debug("Dropping late completion for %s", type(request).__name__)

    service_method(request, callback, options)
    return future


class AsyncServiceInvoker:
    """Base for components that await callback-style provider operations."""

    def _invoke_service(self, service_method: ServiceMethod, request: TRequest,
                        options: Optional[CallOptions] = None) -> "asyncio.Future[TResponse]":
        return invoke_service(service_method, request, options)
