"""Request dispatch: decides whether and how a request body is validated."""

from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel
from starlette.requests import ClientDisconnect
from starlette.requests import Request

from bouncer.core.config import BouncerSettings
from bouncer.core.config import get_bouncer_settings
from bouncer.core.errors import Errors
from bouncer.schemas.error import ErrorKind
from bouncer.services.decoder import decode_body
from bouncer.services.shapes import ensure_value_shape
from bouncer.services.structural import validate_shape

logger = logging.getLogger(__name__)

ShapeT = TypeVar("ShapeT", bound=BaseModel)


def is_eligible(method: str, content_type: str, settings: BouncerSettings) -> bool:
    """Body methods are always eligible; other methods only when they declare a content type."""
    return method in settings.body_methods or content_type != ""


async def bind_request(
    shape: type[ShapeT],
    request: Request,
    settings: BouncerSettings | None = None,
) -> tuple[ShapeT | None, Errors]:
    """Decode and validate the request body, returning the bound instance alongside any errors.

    The instance is ``None`` when the body was not decoded (ineligible or
    non-JSON requests) or could not be decoded.
    """
    ensure_value_shape(shape)
    settings = settings or get_bouncer_settings()

    content_type = request.headers.get("content-type", "")
    if not is_eligible(request.method, content_type, settings):
        return None, Errors()

    if settings.json_marker not in content_type:
        logger.debug("Skipping body validation for non-JSON content type %r", content_type)
        return None, Errors()

    try:
        body = await request.body()
    except ClientDisconnect as exc:
        errors = Errors()
        errors.add([], ErrorKind.DESERIALIZATION, str(exc) or "Client disconnected while reading body")
        return None, errors

    instance, errors = decode_body(shape, body)
    if instance is None:
        return None, errors

    errors.extend(validate_shape(request.method, instance, settings))
    return instance, errors


async def validate(shape: type[BaseModel], request: Request, settings: BouncerSettings | None = None) -> Errors:
    """Return every validation failure for ``request`` against ``shape``."""
    _, errors = await bind_request(shape, request, settings)
    return errors
