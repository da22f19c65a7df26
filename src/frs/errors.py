"""
Error types raised by the frs core.

Nothing in the core catches these or exits the process; the CLI turns any
``FrsError`` into a message on stderr and a non-zero exit code.
"""


class FrsError(Exception):
    """Base class for every error frs reports to the user."""

    pass


class ConfigurationError(FrsError):
    """Home directory, config directory or session identity cannot be resolved."""

    pass


class NotFoundError(FrsError):
    """A named context was requested but has never been saved."""

    def __init__(self, namespace: str, name: str):
        self.namespace = namespace
        self.name = name
        super().__init__(f"Context {namespace}::{name} does not exist")


class UnknownOperationError(FrsError):
    """The composition entry point was given an operation it does not know."""

    def __init__(self, operation: str, known: list[str] | None = None):
        self.operation = operation
        message = f"Unknown operation '{operation}'"
        if known:
            message += f" (expected one of: {', '.join(known)})"
        super().__init__(message)


class OperationArgumentError(FrsError):
    """An operation was given the wrong arguments."""

    pass


class StorageError(FrsError):
    """Reading, writing or creating a directory for a context record failed."""

    pass


class EncodingError(FrsError):
    """A persisted context record could not be decoded."""

    pass


class PlaceholderCollisionError(FrsError):
    """An argument contains the template placeholder and would corrupt the template."""

    pass


class ValidationError(FrsError):
    """Raised when a namespace or name is not a usable handle."""

    pass
