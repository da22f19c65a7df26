"""
Context composition.

Each ``with_*`` operation takes a context and returns a new one: the input
is never modified. A wrap is described as data (a :class:`Wrap` holding the
shell text that goes before and after the inner command) and
:func:`apply_wrap` is the only function that rewrites a template. Wraps
nest, so the first operation applied ends up outermost and the command
given to ``run`` ends up innermost.

``activate_context`` and ``reset`` are not wraps: they replace the whole
context.
"""

import json
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Optional, Sequence

from frs.config import Config
from frs.context.models import Context, StepLogEntry, base_context
from frs.errors import (
    OperationArgumentError,
    PlaceholderCollisionError,
    UnknownOperationError,
)
from frs.logger import get_logger

logger = get_logger(__name__)

PLACEHOLDER = Config.TEMPLATE_PLACEHOLDER

# (namespace, name) -> Context, usually ContextStore.load_named
ContextLoader = Callable[[str, str], Context]


@dataclass(frozen=True)
class Wrap:
    """
    Shell source surrounding the inner command.

    Example:
        Wrap(prefix="(cd /tmp;\\n ", suffix=")") turns ``<inner>`` into
        ``(cd /tmp;\\n <inner>)``.
    """

    prefix: str
    suffix: str = ""


def apply_wrap(template: str, wrap: Wrap) -> str:
    """
    Replace the template's placeholder with ``wrap`` around a fresh placeholder.

    Raises:
        PlaceholderCollisionError: if the template does not hold exactly one
            placeholder, or the result would not.
    """
    found = template.count(PLACEHOLDER)
    if found != 1:
        raise PlaceholderCollisionError(
            f"Template must contain exactly one placeholder, found {found}"
        )

    head, _, tail = template.partition(PLACEHOLDER)
    result = f"{head}{wrap.prefix}{PLACEHOLDER}{wrap.suffix}{tail}"

    if result.count(PLACEHOLDER) != 1:
        raise PlaceholderCollisionError(
            f"Argument contains the reserved placeholder {PLACEHOLDER!r}"
        )
    return result


def render_command(context: Context, command: str) -> str:
    """Substitute the final command for the placeholder."""
    found = context.placeholder_count()
    if found != 1:
        raise PlaceholderCollisionError(
            f"Template must contain exactly one placeholder, found {found}"
        )
    head, _, tail = context.template.partition(PLACEHOLDER)
    return f"{head}{command}{tail}"


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _path_last(path: PurePath) -> str:
    return path.name or str(path)


def _wrap(
    context: Context,
    wrap: Wrap,
    description: str,
    prompt: Optional[str],
    env: Optional[dict[str, str]] = None,
) -> Context:
    template = apply_wrap(context.template, wrap)
    meta = context.meta.model_copy(
        update={
            "is_dirty": True,
            "step_log": [
                *context.meta.step_log,
                StepLogEntry(description=description, prompt=prompt),
            ],
        }
    )
    logger.debug(f"Applied {description}")
    return context.model_copy(
        update={
            "meta": meta,
            "env": {**context.env, **(env or {})},
            "template": template,
        }
    )


# --- Wraps ---


def with_workdir(context: Context, workdir: str) -> Context:
    """Run the inner command from ``workdir``."""
    return _wrap(
        context,
        Wrap(prefix=f"(cd {workdir};\n ", suffix=")"),
        description=f"core::with_workdir {_quote(workdir)}",
        prompt=f"wd(..{_path_last(PurePath(workdir))})",
    )


def with_path(context: Context, path: str) -> Context:
    """Append ``path`` to PATH for the inner command."""
    p = PurePath(path)
    last = _path_last(p)
    if last == "bin":
        # /opt/go/bin reads better as the toolchain it belongs to
        prompt = f"toolchain({p.parent.name or 'bin'})"
    else:
        prompt = f"path({last})"

    return _wrap(
        context,
        Wrap(prefix=f"(export PATH=${{PATH}}:{path};\n ", suffix=")"),
        description=f"core::with_path {_quote(path)}",
        prompt=prompt,
    )


def with_env(context: Context, key: str, value: str) -> Context:
    """Export ``key=value`` for the inner command."""
    return _wrap(
        context,
        Wrap(prefix=f"(export {key}={value};\n ", suffix=")"),
        description=f"core::with_env {_quote(key)}={_quote(value)}",
        prompt=f"env({key})",
        env={key: value},
    )


def with_command(context: Context, command: str) -> Context:
    """Run ``command`` before the inner command."""
    parts = command.split()
    first = parts[0] if parts else ""
    return _wrap(
        context,
        Wrap(prefix=f"({command};\n ", suffix=")"),
        description=f"core::with_command {_quote(command)}",
        prompt=f"exec({first})",
    )


def with_docker(context: Context, container: str) -> Context:
    """Run the inner command inside ``container``."""
    return _wrap(
        context,
        Wrap(prefix=f"(docker run {container} ", suffix=")"),
        description=f"core::with_docker {_quote(container)}",
        prompt=f"ctr({container})",
    )


# --- Replacements ---


def activate_context(
    context: Context, namespace: str, name: str, loader: ContextLoader
) -> Context:
    """Discard ``context`` and continue from the saved context ``namespace::name``."""
    logger.debug(f"Activating {namespace}::{name}")
    return loader(namespace, name)


def reset(context: Context) -> Context:
    """Discard ``context`` and start over from a fresh base context."""
    return base_context()


# --- Dispatch by name ---


def _expect(operation: str, args: Sequence[str], *names: str) -> None:
    if len(args) != len(names):
        usage = " ".join([operation, *(f"<{n}>" for n in names)])
        raise OperationArgumentError(
            f"'{operation}' expects {len(names)} argument(s), got {len(args)}. "
            f"Usage: {usage}"
        )


def _parse_context_args(args: Sequence[str]) -> tuple[str, str]:
    """Parse ``[--namespace NS] NAME``."""
    namespace = Config.DEFAULT_NAMESPACE
    positional = []
    it = iter(args)
    for arg in it:
        if arg == "--namespace":
            try:
                namespace = next(it)
            except StopIteration:
                raise OperationArgumentError("--namespace requires a value")
        elif arg.startswith("--namespace="):
            namespace = arg.split("=", 1)[1]
        else:
            positional.append(arg)

    if len(positional) != 1:
        raise OperationArgumentError(
            "'context' expects: context [--namespace <namespace>] <name>"
        )
    return namespace, positional[0]


def _op_workdir(context, args, loader):
    _expect("workdir", args, "dir")
    return with_workdir(context, args[0])


def _op_path(context, args, loader):
    _expect("path", args, "path")
    return with_path(context, args[0])


def _op_env(context, args, loader):
    _expect("env", args, "key", "value")
    return with_env(context, args[0], args[1])


def _op_command(context, args, loader):
    if not args:
        raise OperationArgumentError("'command' expects: command <cmd...>")
    return with_command(context, " ".join(args))


def _op_docker(context, args, loader):
    _expect("docker", args, "container")
    return with_docker(context, args[0])


def _op_context(context, args, loader):
    namespace, name = _parse_context_args(args)
    if loader is None:
        raise OperationArgumentError("'context' needs a context loader")
    return activate_context(context, namespace, name, loader)


def _op_empty(context, args, loader):
    _expect("empty", args)
    return reset(context)


OPERATIONS: dict[str, Callable[[Context, Sequence[str], Optional[ContextLoader]], Context]] = {
    "workdir": _op_workdir,
    "path": _op_path,
    "env": _op_env,
    "command": _op_command,
    "docker": _op_docker,
    "context": _op_context,
    "empty": _op_empty,
}


def apply_operation(
    context: Context,
    operation: str,
    args: Sequence[str],
    loader: Optional[ContextLoader] = None,
) -> Context:
    """
    Apply the operation registered under ``operation`` to ``context``.

    Args:
        context: Context to start from
        operation: One of :data:`OPERATIONS`
        args: Already tokenized string arguments
        loader: Loads saved contexts, needed by ``context``

    Raises:
        UnknownOperationError: if ``operation`` is not registered
        OperationArgumentError: if ``args`` do not fit the operation
    """
    handler = OPERATIONS.get(operation)
    if handler is None:
        raise UnknownOperationError(operation, known=list(OPERATIONS))
    return handler(context, list(args), loader)
