"""
File-based context persistence.

Two kinds of records, both plain JSON and both overwritten whole on every
write:
- the current terminal's context at the session path
- saved contexts at {context_dir}/{namespace}/{name}.json
"""

from pathlib import Path
from typing import Optional

from frs.config import Config
from frs.context.models import Context, base_context
from frs.errors import NotFoundError, StorageError
from frs.logger import get_logger
from frs.validation import validate_handle, validate_namespace

logger = get_logger(__name__)


def _safe_component(value: str) -> str:
    for sep in Config.PATH_SEPARATORS:
        value = value.replace(sep, Config.PATH_SEPARATOR_REPLACEMENT)
    return value


class ContextStore:
    """Reads and writes session and saved contexts."""

    def __init__(self, context_dir: Path, session_path: Path):
        """
        Args:
            context_dir: Root directory for saved contexts
            session_path: Scratch file of the current terminal
        """
        self.context_dir = Path(context_dir)
        self.session_path = Path(session_path)

    # --- Raw records ---

    def _read(self, path: Path) -> Context:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read context from {path}: {e}") from e
        return Context.decode(data)

    def _write(self, path: Path, context: Context) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(context.encode(), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write context to {path}: {e}") from e
        logger.debug(f"Wrote context {context.meta.namespace}::{context.meta.name} to {path}")

    # --- Current terminal ---

    def load_current(self) -> Context:
        """Load this terminal's context, or a fresh one on first use."""
        if not self.session_path.exists():
            logger.debug(f"No session context at {self.session_path}, starting fresh")
            return base_context()
        return self._read(self.session_path)

    def save_current(self, context: Context) -> None:
        self._write(self.session_path, context)

    # --- Saved contexts ---

    def named_path(self, namespace: str, name: str) -> Path:
        return (
            self.context_dir
            / _safe_component(namespace)
            / f"{_safe_component(name)}.json"
        )

    def load_named(self, namespace: str, name: str) -> Context:
        """
        Load a saved context.

        Raises:
            NotFoundError: if nothing was saved under (namespace, name)
        """
        validate_handle(namespace, name)
        path = self.named_path(namespace, name)
        if not path.exists():
            raise NotFoundError(namespace, name)

        context = self._read(path)
        meta = context.meta.model_copy(update={"is_dirty": False})
        logger.debug(f"Loaded {namespace}::{name} from {path}")
        return context.model_copy(update={"meta": meta})

    def save_named(self, context: Context, namespace: str, name: str) -> Context:
        """
        Save ``context`` as (namespace, name) and make it the terminal's context.

        Returns:
            The saved context, renamed and marked clean.
        """
        validate_handle(namespace, name)
        meta = context.meta.model_copy(
            update={"namespace": namespace, "name": name, "is_dirty": False}
        )
        saved = context.model_copy(update={"meta": meta})

        self._write(self.named_path(namespace, name), saved)
        self.save_current(saved)
        logger.info(f"Saved context {namespace}::{name}")
        return saved

    def delete_named(self, namespace: str, name: str) -> None:
        validate_handle(namespace, name)
        path = self.named_path(namespace, name)
        if not path.exists():
            raise NotFoundError(namespace, name)
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e
        logger.info(f"Deleted context {namespace}::{name}")

    def list_named(self, namespace: Optional[str] = None) -> list[tuple[str, str]]:
        """List saved (namespace, name) pairs, sorted."""
        if namespace is not None:
            validate_namespace(namespace)
            dirs = [self.context_dir / _safe_component(namespace)]
        elif self.context_dir.is_dir():
            dirs = [d for d in self.context_dir.iterdir() if d.is_dir()]
        else:
            dirs = []

        found = []
        for directory in dirs:
            if not directory.is_dir():
                continue
            for path in directory.glob("*.json"):
                found.append((directory.name, path.stem))
        return sorted(found)
