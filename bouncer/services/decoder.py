"""JSON body decoding into fresh binding model instances."""

from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError
from pydantic_core import from_json

from bouncer.core.errors import Errors
from bouncer.schemas.error import ErrorKind
from bouncer.services.shapes import ensure_value_shape

logger = logging.getLogger(__name__)

ShapeT = TypeVar("ShapeT", bound=BaseModel)


def decode_body(shape: type[ShapeT], body: bytes | None) -> tuple[ShapeT | None, Errors]:
    """Decode ``body`` into a new ``shape`` instance.

    An absent, empty or whitespace-only body (and a bare JSON ``null``) decodes
    to the zero instance. Any other failure yields a single
    ``DeserializationError`` with an empty path and no instance.
    """
    ensure_value_shape(shape)
    errors = Errors()

    payload = None
    if body is not None and body.strip():
        try:
            payload = from_json(body)
        except ValueError as exc:
            logger.debug("Rejected unparseable body for %s: %s", shape.__name__, exc)
            errors.add([], ErrorKind.DESERIALIZATION, str(exc))
            return None, errors

    if payload is None:
        payload = {}

    try:
        return shape.model_validate(payload), errors
    except ValidationError as exc:
        logger.debug("Rejected body not matching %s: %s", shape.__name__, exc)
        errors.add([], ErrorKind.DESERIALIZATION, _format_validation_error(exc))
        return None, errors


def _format_validation_error(exc: ValidationError) -> str:
    issues = []
    for issue in exc.errors(include_url=False):
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = str(issue.get("msg", "Invalid value"))
        issues.append(f"{location}: {message}" if location else message)
    return "; ".join(issues) or str(exc)
