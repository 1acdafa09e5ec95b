"""Method-dependent field constraint checks over decoded model instances."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel

from bouncer.core.config import BouncerSettings
from bouncer.core.config import get_bouncer_settings
from bouncer.core.errors import Errors
from bouncer.schemas.error import ErrorKind
from bouncer.services.shapes import FieldDescriptor
from bouncer.services.shapes import describe_shape

IMMUTABLE_MESSAGE = "Immutable"
REQUIRED_MESSAGE = "Required"

_FieldRule = Callable[[Errors, tuple[str, ...], FieldDescriptor, object], None]


def validate_shape(method: str, instance: BaseModel, settings: BouncerSettings | None = None) -> Errors:
    """Apply create or patch rules to ``instance`` depending on ``method``.

    Methods outside both rule sets produce no errors.
    """
    settings = settings or get_bouncer_settings()
    errors = Errors()

    if method in settings.patch_methods:
        _walk(errors, (), instance, _check_patch_field)
    elif method in settings.create_methods:
        _walk(errors, (), instance, _check_create_field)

    return errors


def _walk(errors: Errors, parent: tuple[str, ...], instance: BaseModel, rule: _FieldRule) -> None:
    for descriptor in describe_shape(type(instance)):
        if descriptor.skip:
            continue

        value = descriptor.value_of(instance)
        path = (*parent, descriptor.name)

        # Optional nested models are only descended into when present.
        if descriptor.nested is not None and (value is not None or not descriptor.nested_optional):
            _walk(errors, path, value, rule)

        rule(errors, path, descriptor, value)


def _check_create_field(errors: Errors, path: tuple[str, ...], descriptor: FieldDescriptor, value: object) -> None:
    if descriptor.immutable_on_create and not descriptor.is_zero(value):
        errors.add(path, ErrorKind.IMMUTABLE, IMMUTABLE_MESSAGE)
    if descriptor.required and descriptor.is_zero(value):
        errors.add(path, ErrorKind.REQUIRED, REQUIRED_MESSAGE)


def _check_patch_field(errors: Errors, path: tuple[str, ...], descriptor: FieldDescriptor, value: object) -> None:
    if descriptor.immutable_on_patch and not descriptor.is_zero(value):
        errors.add(path, ErrorKind.IMMUTABLE, IMMUTABLE_MESSAGE)
