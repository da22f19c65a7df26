"""
Top-level CLI commands: with, run, save, inspect, prompt, list, delete.

Commands print only shell-consumable text on stdout; errors and logs go to
stderr.
"""

from contextlib import contextmanager
from typing import List, Optional

import typer

from frs.config import Config, get_context_dir, get_session_dir
from frs.context.engine import OPERATIONS, apply_operation, render_command
from frs.context.render import pretty_context, pretty_prompt, to_shell
from frs.errors import FrsError, ValidationError
from frs.logger import get_logger
from frs.session import ProcessInfo, SessionResolver
from frs.store import ContextStore

logger = get_logger(__name__)

PASSTHROUGH = {"allow_extra_args": True, "ignore_unknown_options": True}


def configure_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    from frs.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else None)


def get_store() -> ContextStore:
    """Build the store for this invocation, resolving the session path once."""
    resolver = SessionResolver(ProcessInfo(), get_session_dir())
    return ContextStore(get_context_dir(), resolver.path)


@contextmanager
def report_errors():
    """Turn any FrsError into a message on stderr and exit code 1."""
    try:
        yield
    except FrsError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def with_operation(
    operation: str = typer.Argument(
        help=f"Operation to apply: {', '.join(OPERATIONS)}"
    ),
    args: Optional[List[str]] = typer.Argument(None, help="Operation arguments"),
):
    """Apply an operation to the current terminal's context."""
    with report_errors():
        store = get_store()
        context = store.load_current()
        context = apply_operation(context, operation, args or [], loader=store.load_named)
        store.save_current(context)
        typer.echo(pretty_prompt(context))


def run_command(
    command: Optional[List[str]] = typer.Argument(None, help="Command to run"),
    context_name: str = typer.Option(
        Config.DEFAULT_NAME, "--context", help="Use a saved context"
    ),
    namespace: str = typer.Option(
        Config.DEFAULT_NAMESPACE, "--namespace", help="Namespace of --context"
    ),
    show: bool = typer.Option(
        False, "--show", help="Also print the step log and context record"
    ),
):
    """Print the command wrapped in a context, ready for the shell to eval."""
    with report_errors():
        store = get_store()
        if (namespace, context_name) == (Config.DEFAULT_NAMESPACE, Config.DEFAULT_NAME):
            context = store.load_current()
        else:
            context = store.load_named(namespace, context_name)

        rendered = render_command(context, " ".join(command or []))
        if show:
            typer.echo(to_shell(context.model_copy(update={"template": rendered})), nl=False)
        else:
            typer.echo(rendered)


def save_command(
    name: str = typer.Argument(help="Save as name"),
    namespace: str = typer.Option(
        Config.DEFAULT_NAMESPACE, "--namespace", help="Save into namespace"
    ),
):
    """Save the current context under a name."""
    with report_errors():
        store = get_store()
        saved = store.save_named(store.load_current(), namespace, name)
        typer.echo(f"✅ Saved {pretty_prompt(saved)}")


def inspect_command(
    name: str = typer.Argument(Config.DEFAULT_NAME, help="Context name"),
    namespace: str = typer.Option(
        Config.DEFAULT_NAMESPACE, "--namespace", help="Context namespace"
    ),
    color: Optional[bool] = typer.Option(None, "--color/--no-color"),
):
    """Show a context: name, step log, environment and template."""
    with report_errors():
        store = get_store()
        if name == Config.DEFAULT_NAME:
            if namespace != Config.DEFAULT_NAMESPACE:
                raise ValidationError(f"Namespace '{namespace}' needs a context name")
            context = store.load_current()
        else:
            context = store.load_named(namespace, name)

        typer.echo(pretty_context(context, color=color is not False), nl=False, color=color)


def prompt_command(
    color: Optional[bool] = typer.Option(None, "--color/--no-color"),
):
    """Print a one-line summary of the current context for a shell prompt."""
    with report_errors():
        context = get_store().load_current()
        typer.echo(pretty_prompt(context, color=color is not False), nl=False, color=color)


def list_command(
    namespace: Optional[str] = typer.Option(
        None, "--namespace", help="Only list this namespace"
    ),
):
    """List saved contexts."""
    with report_errors():
        entries = get_store().list_named(namespace)
        if not entries:
            typer.echo("No saved contexts.", err=True)
            return
        for ns, name in entries:
            typer.echo(name if ns == Config.DEFAULT_NAMESPACE else f"{ns}::{name}")


def delete_command(
    name: str = typer.Argument(help="Context name"),
    namespace: str = typer.Option(
        Config.DEFAULT_NAMESPACE, "--namespace", help="Context namespace"
    ),
):
    """Delete a saved context."""
    with report_errors():
        get_store().delete_named(namespace, name)
        typer.echo(f"🗑️  Deleted {namespace}::{name}")


def register_commands(app: typer.Typer):
    """Register the top-level commands on the main app."""
    app.command("with", context_settings=PASSTHROUGH)(with_operation)
    app.command("run", context_settings=PASSTHROUGH)(run_command)
    app.command("save")(save_command)
    app.command("inspect")(inspect_command)
    app.command("prompt")(prompt_command)
    app.command("list")(list_command)
    app.command("delete")(delete_command)
