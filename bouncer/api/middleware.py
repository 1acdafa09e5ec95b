"""Handler wrapper that rejects invalid request bodies before they reach the endpoint."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
import functools
import inspect
import logging
from typing import Any

from fastapi import Request
from fastapi import Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from bouncer.core.config import BouncerSettings
from bouncer.core.config import get_bouncer_settings
from bouncer.core.errors import Errors
from bouncer.core.errors import respond_with_errors
from bouncer.services.dispatcher import validate
from bouncer.services.shapes import ensure_value_shape

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Any]
Responder = Callable[[Errors], Response | None]


def new_bouncer_handler(
    shape: type[BaseModel],
    handler: Handler,
    *,
    responder: Responder = respond_with_errors,
    settings: BouncerSettings | None = None,
) -> Callable[[Request], Awaitable[Response]]:
    """Wrap ``handler`` so that it only sees requests whose body passes validation.

    The shape is checked here, once, so a misconfigured model fails at
    startup instead of on the first request. ``handler`` may be sync or async.
    """
    ensure_value_shape(shape)
    settings = settings or get_bouncer_settings()
    handler_is_async = _is_async_callable(handler)
    logger.debug("Built bouncer handler for %s with settings=%s", shape.__name__, settings.safe_for_logging())

    async def bouncer_endpoint(request: Request) -> Response:
        errors = await validate(shape, request, settings)
        if errors:
            logger.info(
                "Rejected %s %s with %d validation error(s)",
                request.method,
                request.url.path,
                len(errors),
            )
            response = responder(errors)
            if response is None:
                response = respond_with_errors(errors)
            return response

        if handler_is_async:
            return await handler(request)
        response = await run_in_threadpool(handler, request)
        if inspect.isawaitable(response):
            response = await response
        return response

    return bouncer_endpoint


def _is_async_callable(handler: Handler) -> bool:
    while isinstance(handler, functools.partial):
        handler = handler.func
    return inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(getattr(handler, "__call__", None))
