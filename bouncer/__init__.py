"""Public Bouncer imports for binding and validating request bodies."""

from bouncer.api.dependencies import bind
from bouncer.api.middleware import new_bouncer_handler
from bouncer.core.config import BouncerSettings
from bouncer.core.config import get_bouncer_settings
from bouncer.core.errors import BouncerRejected
from bouncer.core.errors import Errors
from bouncer.core.errors import ShapeDefinitionError
from bouncer.core.errors import register_error_handlers
from bouncer.core.errors import respond_with_errors
from bouncer.schemas.error import ErrorEntry
from bouncer.schemas.error import ErrorKind
from bouncer.schemas.tags import FormName
from bouncer.schemas.tags import Immutable
from bouncer.schemas.tags import Required
from bouncer.schemas.tags import Skip
from bouncer.services.dispatcher import validate
from bouncer.services.structural import validate_shape

__all__ = [
    "BouncerRejected",
    "BouncerSettings",
    "ErrorEntry",
    "ErrorKind",
    "Errors",
    "FormName",
    "Immutable",
    "Required",
    "ShapeDefinitionError",
    "Skip",
    "bind",
    "get_bouncer_settings",
    "new_bouncer_handler",
    "register_error_handlers",
    "respond_with_errors",
    "validate",
    "validate_shape",
]
