"""Validation error collection, exception types and the default error responder."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Sequence
import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import Response
from fastapi import status
from pydantic_core import PydanticSerializationError

from bouncer.schemas.error import ERROR_LIST_ADAPTER
from bouncer.schemas.error import ErrorEntry
from bouncer.schemas.error import ErrorKind

logger = logging.getLogger(__name__)

ERROR_CONTENT_TYPE = "application/json; charset=utf-8"
HTTP_UNPROCESSABLE_ENTITY = 422


class Errors:
    """Ordered collection of validation failures for one request."""

    def __init__(self, entries: Iterable[ErrorEntry] | None = None) -> None:
        self._entries: list[ErrorEntry] = list(entries) if entries else []

    def add(self, path: Sequence[str], kind: ErrorKind, message: str) -> None:
        """Append a failure; repeated calls accumulate."""
        self._entries.append(ErrorEntry(field=list(path), error=kind, message=message))

    def extend(self, other: Errors) -> None:
        self._entries.extend(other)

    def has(self, kind: ErrorKind) -> bool:
        """Return whether any entry has the given kind."""
        return any(entry.error == kind for entry in self._entries)

    def to_json(self) -> bytes:
        return ERROR_LIST_ADAPTER.dump_json(self._entries, by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> Errors:
        return cls(ERROR_LIST_ADAPTER.validate_json(data))

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> ErrorEntry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Errors):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Errors({self._entries!r})"


class BouncerError(Exception):
    """Base exception for request binding failures."""


class ShapeDefinitionError(BouncerError, TypeError):
    """Raised when a binding model is not a usable value shape.

    This is a configuration mistake in the calling code, never a request error.
    """


class BouncerRejected(BouncerError):
    """Carries a non-empty error collection to the registered exception handler."""

    def __init__(self, errors: Errors) -> None:
        super().__init__(f"Request rejected with {len(errors)} validation error(s)")
        self.errors = errors


def _status_for(errors: Errors) -> int:
    if errors.has(ErrorKind.DESERIALIZATION):
        return status.HTTP_400_BAD_REQUEST
    if errors.has(ErrorKind.CONTENT_TYPE):
        return status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    return HTTP_UNPROCESSABLE_ENTITY


def respond_with_errors(errors: Errors) -> Response | None:
    """Build the default JSON rejection response, or ``None`` when there is nothing to report.

    Callers that need a different envelope can pass their own responder to
    the handler wrapper instead.
    """
    if not errors:
        return None

    try:
        body = errors.to_json()
    except PydanticSerializationError:
        logger.exception("Failed to serialize %d validation error(s)", len(errors))
        body = b""

    return Response(content=body, status_code=_status_for(errors), media_type=ERROR_CONTENT_TYPE)


async def bouncer_rejected_handler(_: Request, exc: BouncerRejected) -> Response:
    """Render rejected bindings with the default responder."""

    return respond_with_errors(exc.errors)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the Bouncer rejection handler to a FastAPI app instance."""

    app.add_exception_handler(BouncerRejected, bouncer_rejected_handler)
