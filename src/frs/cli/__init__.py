"""
frs CLI — compose shell commands from reusable contexts.

Commands (see main.py):
- with:    apply an operation to the current terminal's context
- run:     print the command wrapped in a context
- save:    save the current context under a name
- inspect: show a context in detail
- prompt:  one-line summary for PS1
- list, delete: manage saved contexts
"""

import typer

from frs.cli.main import configure_logging, register_commands

app = typer.Typer(help="frs - compose shell commands from reusable contexts")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    frs - compose shell commands from reusable contexts.
    """
    configure_logging(verbose)


register_commands(app)

if __name__ == "__main__":
    app()
