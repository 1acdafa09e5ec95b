"""FastAPI dependency that binds and validates a request body."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
import logging
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel

from bouncer.core.config import BouncerSettings
from bouncer.core.config import get_bouncer_settings
from bouncer.core.errors import BouncerRejected
from bouncer.services.decoder import decode_body
from bouncer.services.dispatcher import bind_request
from bouncer.services.shapes import ensure_value_shape

logger = logging.getLogger(__name__)

ShapeT = TypeVar("ShapeT", bound=BaseModel)


def bind(shape: type[ShapeT], settings: BouncerSettings | None = None) -> Callable[[Request], Awaitable[ShapeT]]:
    """Return a dependency yielding the validated ``shape`` instance.

    Requests that were not decoded (ineligible or non-JSON) receive a zero
    instance. Failures raise ``BouncerRejected``; register the handler with
    ``register_error_handlers`` to render them.
    """
    ensure_value_shape(shape)
    settings = settings or get_bouncer_settings()
    logger.debug("Built bouncer dependency for %s with settings=%s", shape.__name__, settings.safe_for_logging())

    async def bound_body(request: Request) -> ShapeT:
        instance, errors = await bind_request(shape, request, settings)
        if instance is None and not errors:
            instance, errors = decode_body(shape, None)
        if errors:
            logger.info(
                "Rejected %s %s with %d validation error(s)",
                request.method,
                request.url.path,
                len(errors),
            )
            raise BouncerRejected(errors)
        return instance

    return bound_body
