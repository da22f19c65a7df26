"""Unit tests for context renderings (frs.context.render)."""

import json

import typer

from frs.config import Config
from frs.context.engine import with_command, with_env, with_workdir
from frs.context.models import Context, Metadata, StepLogEntry, base_context
from frs.context.render import pretty_context, pretty_prompt, sanitize, to_shell

PH = Config.TEMPLATE_PLACEHOLDER


class TestToShell:
    """Tests for the executable form."""

    def test_template_then_step_log(self):
        context = with_workdir(base_context(), "/tmp")
        lines = to_shell(context).splitlines()

        assert lines[0] == "(cd /tmp;"
        assert lines[1] == f" {PH})"
        assert lines[2] == "# $ wd(..tmp)"
        assert lines[3] == '# ! core::with_workdir "/tmp"'
        assert lines[4].startswith("# FRS_META=")
        assert len(lines) == 5

    def test_step_without_prompt_has_only_description(self):
        context = Context(
            meta=Metadata(step_log=[StepLogEntry(description="manual step")]),
        )
        lines = to_shell(context).splitlines()
        assert "# ! manual step" in lines
        assert not any(line.startswith("# $") for line in lines)

    def test_meta_line_embeds_context(self):
        context = with_env(base_context(), "GREETING", "hello\nworld")
        meta_line = to_shell(context).splitlines()[-1]

        literal = meta_line[len("# FRS_META="):]
        assert Context.decode(json.loads(literal)) == context

    def test_ends_with_newline(self):
        assert to_shell(base_context()).endswith("\n")


class TestPrettyContext:
    """Tests for the inspection view."""

    def test_clean_named_context(self, proj_context):
        output = pretty_context(proj_context)

        assert output.splitlines()[0] == "# name: proj"
        assert output == f"# name: proj\n{PH}\n"

    def test_non_default_namespace(self):
        context = Context(meta=Metadata(namespace="team", name="build"))
        assert pretty_context(context).startswith("# name: team::build\n")

    def test_steps_and_sorted_env(self):
        context = with_env(base_context(), "ZED", "1")
        context = with_env(context, "ALPHA", "2")
        lines = pretty_context(context).splitlines()

        assert lines[:5] == [
            "# name: default",
            "# $ env(ZED)",
            '# ! core::with_env "ZED"="1"',
            "# $ env(ALPHA)",
            '# ! core::with_env "ALPHA"="2"',
        ]
        env_lines = [line for line in lines if line.startswith("# frs_env:")]
        assert env_lines == [
            "# frs_env: ALPHA=2",
            "# frs_env: FRS_VERSION=" + context.env["FRS_VERSION"],
            "# frs_env: ZED=1",
        ]

    def test_color(self, proj_context):
        colored = pretty_context(proj_context, color=True)
        assert "\x1b[" in colored
        assert typer.unstyle(colored) == pretty_context(proj_context)


class TestPrettyPrompt:
    """Tests for the prompt fragment."""

    def test_clean_context(self, proj_context):
        assert pretty_prompt(proj_context) == "(proj)"

    def test_clean_context_hides_steps(self, proj_context):
        context = with_workdir(proj_context, "/tmp")
        clean = context.model_copy(
            update={"meta": context.meta.model_copy(update={"is_dirty": False})}
        )
        assert pretty_prompt(clean) == "(proj)"

    def test_dirty_context_lists_steps(self):
        context = with_workdir(base_context(), "/srv/app")
        context = with_command(context, "make build")
        assert pretty_prompt(context) == "(default) wd(..app) exec(make)"

    def test_namespace(self):
        context = Context(meta=Metadata(namespace="team", name="build"))
        assert pretty_prompt(context) == "(team::build)"

    def test_steps_without_prompt_are_skipped(self):
        context = Context(
            meta=Metadata(
                name="x",
                is_dirty=True,
                step_log=[
                    StepLogEntry(description="a"),
                    StepLogEntry(description="b", prompt="env(B)"),
                ],
            )
        )
        assert pretty_prompt(context) == "(x) env(B)"

    def test_prompt_is_sanitized(self):
        context = with_env(base_context(), "A\tB C\n", "1")
        assert pretty_prompt(context) == "(default) env(AB C)"

    def test_color(self, proj_context):
        colored = pretty_prompt(proj_context, color=True)
        assert typer.unstyle(colored) == "(proj)"


class TestSanitize:
    def test_removes_tabs_and_newlines_keeps_spaces(self):
        assert sanitize("a\tb\nc d\r\x0be") == "abc de"

    def test_plain_text_unchanged(self):
        assert sanitize("wd(..src)") == "wd(..src)"
