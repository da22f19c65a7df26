"""
Input validation for context handles.

Namespaces and names end up as directory and file names under the context
directory, so they are checked before any path is built from them.
"""

import re

from frs.config import Config
from frs.errors import ValidationError
from frs.logger import get_logger

logger = get_logger(__name__)


def validate_namespace(namespace: str) -> str:
    """
    Validate a namespace.

    Namespaces must be non-empty, single-line and not a relative path
    component such as ``.`` or ``..``.
    """
    if not namespace:
        raise ValidationError("Namespace cannot be empty")

    if namespace in (".", ".."):
        raise ValidationError(f"Namespace cannot be '{namespace}'")

    if re.search(r"[\x00-\x1f\x7f]", namespace):
        raise ValidationError("Namespace cannot contain control characters")

    return namespace


def validate_name(name: str) -> str:
    """Validate a context name."""
    if not name:
        raise ValidationError("Context name cannot be empty")

    if name in (".", ".."):
        raise ValidationError(f"Context name cannot be '{name}'")

    if re.search(r"[\x00-\x1f\x7f]", name):
        raise ValidationError("Context name cannot contain control characters")

    return name


def validate_handle(namespace: str, name: str) -> tuple[str, str]:
    """
    Validate an explicit (namespace, name) handle used by save and load.

    The ``(default, default)`` pair is the anonymous per-terminal context and
    can never be addressed by name.
    """
    validate_namespace(namespace)
    validate_name(name)

    if (namespace, name) == (Config.DEFAULT_NAMESPACE, Config.DEFAULT_NAME):
        logger.debug("Rejected reserved handle default::default")
        raise ValidationError(
            "'default' is reserved for the current terminal's context; "
            "choose another name"
        )

    return namespace, name
