"""Error entry schemas serialized in rejection responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import TypeAdapter


class ErrorKind(str, Enum):
    """Kinds of request validation failures."""

    DESERIALIZATION = "DeserializationError"
    CONTENT_TYPE = "ContentTypeError"
    IMMUTABLE = "ImmutableError"
    REQUIRED = "RequiredError"


class ErrorEntry(BaseModel):
    """Single field-scoped validation failure.

    ``field`` is the path of external field names from the bound shape down to
    the offending field; it is empty for whole-body failures.
    """

    field: list[str]
    error: ErrorKind
    message: str


ERROR_LIST_ADAPTER = TypeAdapter(list[ErrorEntry])
