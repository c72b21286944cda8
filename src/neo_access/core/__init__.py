"""Core domain primitives: identifiers, pagination and the error taxonomy."""

from .exceptions import *  # noqa: F401,F403
from .value_objects import *  # noqa: F401,F403
from .exceptions import __all__ as _exception_names
from .value_objects import __all__ as _value_object_names

__all__ = list(_exception_names) + list(_value_object_names)
