"""
Contexts and the operations that compose them.

- models: Context, Metadata and StepLogEntry
- engine: wrap operations and the operation registry
- render: executable, inspection and prompt renderings
"""

from frs.context.models import Context, Metadata, StepLogEntry, base_context

__all__ = ["Context", "Metadata", "StepLogEntry", "base_context"]
