"""
Renderings of a context.

- to_shell:       template followed by the step log and a JSON dump, as
                  shell comments
- pretty_context: verbose multi-line view for ``frs inspect``
- pretty_prompt:  one-line fragment for a shell prompt

All three are pure. Colors are applied only when ``color=True``.
"""

import json

import typer

from frs.config import Config
from frs.context.models import Context

STRING = typer.colors.GREEN
KEYWORD = typer.colors.MAGENTA
FUNCTION = typer.colors.BLUE


def _paint(text: str, fg: str, color: bool) -> str:
    return typer.style(text, fg=fg) if color else text


def sanitize(text: str) -> str:
    """Drop every whitespace character except the plain space."""
    return "".join(c for c in text if c == " " or not c.isspace())


def display_name(context: Context) -> str:
    meta = context.meta
    if meta.namespace == Config.DEFAULT_NAMESPACE:
        return meta.name
    return f"{meta.namespace}::{meta.name}"


def to_shell(context: Context) -> str:
    """Render the executable form: template, step log comments, FRS_META."""
    lines = [context.template]
    for step in context.meta.step_log:
        if step.prompt is not None:
            lines.append(f"# $ {step.prompt}")
        lines.append(f"# ! {step.description}")
    lines.append(f"# FRS_META={json.dumps(context.encode(), ensure_ascii=False)}")
    return "\n".join(lines) + "\n"


def pretty_context(context: Context, color: bool = False) -> str:
    """Render the inspection view."""
    lines = [_paint(f"# name: {display_name(context)}", STRING, color)]

    for step in context.meta.step_log:
        if step.prompt is not None:
            lines.append(_paint(f"# $ {step.prompt}", KEYWORD, color))
        lines.append(_paint(f"# ! {step.description}", KEYWORD, color))

    for key, value in sorted(context.env.items()):
        lines.append(_paint(f"# frs_env: {key}={value}", STRING, color))

    lines.append(_paint(context.template, FUNCTION, color))
    return "\n".join(lines) + "\n"


def pretty_prompt(context: Context, color: bool = False) -> str:
    """
    Render the prompt fragment, e.g. ``(proj) wd(..src) env(DEBUG)``.

    Step summaries are listed only while the context has unsaved changes.
    """
    fragment = f"({_paint(display_name(context), STRING, color)})"
    if not context.meta.is_dirty:
        return fragment

    for step in context.meta.step_log:
        if step.prompt is not None:
            fragment += " " + _paint(sanitize(step.prompt), KEYWORD, color)
    return fragment
