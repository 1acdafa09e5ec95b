"""Field descriptor tables for binding models."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import inspect
from types import UnionType
from typing import Annotated
from typing import Any
from typing import Union
from typing import get_args
from typing import get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from bouncer.core.errors import ShapeDefinitionError
from bouncer.schemas.tags import SKIP_FORM_NAME
from bouncer.schemas.tags import FormName
from bouncer.schemas.tags import Immutable
from bouncer.schemas.tags import Required
from bouncer.schemas.tags import Skip


@dataclass(frozen=True)
class FieldDescriptor:
    """Binding constraints and nesting information for one model field."""

    attribute: str
    name: str
    field_info: FieldInfo
    skip: bool = False
    required: bool = False
    immutable_on_create: bool = False
    immutable_on_patch: bool = False
    nested: type[BaseModel] | None = None
    nested_optional: bool = False

    def value_of(self, instance: BaseModel) -> Any:
        return getattr(instance, self.attribute)

    def zero_value(self) -> Any:
        """Return a fresh copy of the field's zero value."""
        return self.field_info.get_default(call_default_factory=True)

    def is_zero(self, value: Any) -> bool:
        """Return whether ``value`` means the field was not supplied."""
        zero = self.zero_value()
        if isinstance(value, BaseModel) and isinstance(zero, BaseModel):
            return type(value) is type(zero) and value.model_dump() == zero.model_dump()
        return value == zero


def is_value_shape(candidate: Any) -> bool:
    """Return whether ``candidate`` is a model class rather than an instance or wrapper type."""
    return inspect.isclass(candidate) and issubclass(candidate, BaseModel)


def ensure_value_shape(shape: Any) -> type[BaseModel]:
    """Fail fast unless ``shape`` can be used as a binding model."""
    if not is_value_shape(shape):
        raise ShapeDefinitionError(f"Binding models must be pydantic model classes, got {shape!r}")
    _verify_shape(shape)
    return shape


@lru_cache(maxsize=None)
def _verify_shape(shape: type[BaseModel]) -> None:
    pending = [shape]
    seen: set[type[BaseModel]] = set()
    while pending:
        current = pending.pop()
        if current in seen:
            continue
        seen.add(current)

        if not current.__pydantic_complete__:
            raise ShapeDefinitionError(f"{current.__name__} has unresolved annotations; call model_rebuild() first")

        for attribute, field in current.model_fields.items():
            if field.is_required():
                raise ShapeDefinitionError(
                    f"{current.__name__}.{attribute} must declare a default to serve as its zero value"
                )
        for descriptor in describe_shape(current):
            if descriptor.nested is not None and not descriptor.skip:
                pending.append(descriptor.nested)


@lru_cache(maxsize=None)
def describe_shape(shape: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    """Build the per-field descriptor table for a model, in declaration order."""
    return tuple(_describe_field(attribute, field) for attribute, field in shape.model_fields.items())


def _describe_field(attribute: str, field: FieldInfo) -> FieldDescriptor:
    skip = False
    form_name: str | None = None
    required = False
    immutable_on_create = False
    immutable_on_patch = False

    for marker in field.metadata:
        if isinstance(marker, Skip):
            skip = True
        elif isinstance(marker, FormName):
            if marker.name == SKIP_FORM_NAME:
                skip = True
            else:
                form_name = marker.name
        elif isinstance(marker, Required):
            required = True
        elif isinstance(marker, Immutable):
            immutable_on_create = immutable_on_create or marker.on_create
            immutable_on_patch = immutable_on_patch or marker.on_patch

    nested, nested_optional = _nested_shape(field.annotation)

    return FieldDescriptor(
        attribute=attribute,
        name=field.serialization_alias or field.alias or form_name or attribute,
        field_info=field,
        skip=skip,
        required=required,
        immutable_on_create=immutable_on_create,
        immutable_on_patch=immutable_on_patch,
        nested=nested,
        nested_optional=nested_optional,
    )


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _nested_shape(annotation: Any) -> tuple[type[BaseModel] | None, bool]:
    annotation = _strip_annotated(annotation)
    if is_value_shape(annotation):
        return annotation, False

    if get_origin(annotation) in (Union, UnionType):
        members = [_strip_annotated(arg) for arg in get_args(annotation)]
        shapes = [member for member in members if member is not type(None)]
        if len(shapes) == 1 and len(members) == 2 and is_value_shape(shapes[0]):
            return shapes[0], True

    return None, False
