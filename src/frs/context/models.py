"""
Pydantic models for a composable context.

A context is persisted as one JSON record: metadata with the step log, a
display snapshot of environment variables, and the shell template holding
exactly one placeholder.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from frs import __version__
from frs.config import Config
from frs.errors import EncodingError


class StepLogEntry(BaseModel):
    """One applied operation.

    ``description`` is the literal record of the operation and its arguments;
    ``prompt`` is the short summary shown in the prompt fragment, or ``None``
    when the step should not show up there.
    """

    description: str
    prompt: Optional[str] = None


class Metadata(BaseModel):
    """Identity and provenance of a context."""

    namespace: str = Config.DEFAULT_NAMESPACE
    name: str = ""
    is_dirty: bool = False
    step_log: list[StepLogEntry] = Field(default_factory=list)


class Context(BaseModel):
    """The full composable state flowing through operations."""

    meta: Metadata = Field(default_factory=Metadata)
    env: dict[str, str] = Field(default_factory=dict)
    template: str = Config.TEMPLATE_PLACEHOLDER

    def placeholder_count(self) -> int:
        return self.template.count(Config.TEMPLATE_PLACEHOLDER)

    def encode(self) -> str:
        """Serialize to the JSON record stored on disk."""
        return self.model_dump_json()

    @classmethod
    def decode(cls, data: str | bytes) -> "Context":
        """Parse a JSON record produced by :meth:`encode`."""
        try:
            return cls.model_validate_json(data)
        except PydanticValidationError as e:
            raise EncodingError(f"Invalid context record: {e}") from e


def base_context() -> Context:
    """A fresh, clean context whose template is only the placeholder."""
    return Context(
        meta=Metadata(
            namespace=Config.DEFAULT_NAMESPACE,
            name=Config.DEFAULT_NAME,
            is_dirty=False,
        ),
        env={"FRS_VERSION": __version__},
        template=Config.TEMPLATE_PLACEHOLDER,
    )
