"""Field markers that declare binding constraints on model shapes.

Markers are attached with ``typing.Annotated``::

    class Widget(BaseModel):
        id: Annotated[int, Immutable(on_patch=False)] = 0
        name: Annotated[str, Required()] = ""
        slug: Annotated[str, FormName("widget_slug")] = ""
        internal: Annotated[str, Skip()] = ""

The serialization-name override is the regular pydantic alias.
"""

from __future__ import annotations

from dataclasses import dataclass

SKIP_FORM_NAME = "-"


@dataclass(frozen=True)
class Skip:
    """Exclude the field from validation and from nested traversal."""


@dataclass(frozen=True)
class FormName:
    """Form-name override used when naming the field in errors.

    ``FormName("-")`` is equivalent to ``Skip()``.
    """

    name: str


@dataclass(frozen=True)
class Required:
    """The field must be supplied with a non-zero value on create methods."""


@dataclass(frozen=True)
class Immutable:
    """The field must be left at its zero value for the selected methods."""

    on_create: bool = True
    on_patch: bool = True
