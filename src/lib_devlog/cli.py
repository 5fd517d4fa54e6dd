"""Command-line adapter built on rich-click.

Purpose
-------
Give developers a quick way to preview the console layout (``demo``), to
pretty-print JSON-lines log files (``render``) and to inspect the installed
package (``info``).

Contents
--------
* :func:`cli` – root group handling traceback and ``.env`` toggles.
* ``info`` / ``demo`` / ``render`` sub-commands.
* :func:`main` – entry point wrapping :func:`lib_cli_exit_tools.run_cli`.

System Role
-----------
Presentation layer only: commands delegate to the runtime façade and the
record renderer and never write escape sequences themselves.
"""

from __future__ import annotations

import json
from typing import Any, Sequence, TextIO

import lib_cli_exit_tools
import rich_click as click
from click.core import ParameterSource

from . import __init__conf__
from . import config as config_module
from .domain import CONSOLE_STYLE_THEMES, LogLevel, Record, RenderConfig
from .runtime import logdemo, summary_info
from .runtime._composition import create_renderer

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
RENDER_MODULE_PATH = "lib_devlog::render"


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load the nearest .env before reading LOG_* variables (also enabled by {config_module.DOTENV_ENV_VAR}=1)",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit = use_dotenv if ctx.get_parameter_source("use_dotenv") is not ParameterSource.DEFAULT else None
    if config_module.should_use_dotenv(explicit=explicit):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


def _stdout_is_terminal() -> bool:
    stream = click.get_text_stream("stdout")
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _command_config(
    *,
    color: bool | None,
    timestamps: bool | None,
    width: int | None,
    theme: str | None,
) -> RenderConfig:
    """Return the env-derived config with command-line options applied."""

    try:
        base = config_module.render_config_from_env()
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    changes: dict[str, Any] = {}
    if timestamps is not None:
        changes["show_timestamp"] = timestamps
    if width is not None:
        changes["max_line_width"] = width
    if theme is not None:
        changes["theme"] = theme
    if color is not None:
        changes["color_enabled"] = color
    elif base.color_enabled is None:
        changes["color_enabled"] = _stdout_is_terminal()
    return base.replace(**changes)


_THEME_CHOICE = click.Choice(sorted(CONSOLE_STYLE_THEMES), case_sensitive=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--theme", type=_THEME_CHOICE, default=None, help="Render a single palette instead of all of them")
@click.option("--color/--no-color", default=None, help="Force styled output on or off (default: detect terminal)")
@click.option("--timestamps/--no-timestamps", default=None, help="Prefix each record with its time")
@click.option("--width", type=click.IntRange(min=0), default=None, help="Wrap width for fields, 0 disables wrapping")
def cli_demo(theme: str | None, color: bool | None, timestamps: bool | None, width: int | None) -> None:
    """Render sample records with one or all built-in themes."""

    config = _command_config(color=color, timestamps=timestamps, width=width, theme=None)
    enabled = bool(config.color_enabled)
    themes = [theme.lower()] if theme else list(CONSOLE_STYLE_THEMES)
    for index, name in enumerate(themes):
        if index:
            click.echo("")
        click.echo(f"=== Theme: {name} ===")
        for block in logdemo(
            theme=name,
            color=enabled,
            show_timestamp=config.show_timestamp,
            max_line_width=config.max_line_width,
        ):
            click.echo(block, color=enabled)


def _record_from_line(line: str, number: int) -> Record:
    """Decode one JSON-lines entry; undecodable or too deeply nested entries become error records."""

    try:
        return Record.from_dict(json.loads(line))
    except (ValueError, TypeError, RecursionError) as exc:
        return Record(
            LogLevel.ERROR,
            "unreadable log record",
            RENDER_MODULE_PATH,
            fields={"line": number, "raw": line.rstrip("\r\n"), "cause": exc},
        )


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=click.File("r", encoding="utf-8", errors="replace"), default="-")
@click.option("--theme", type=_THEME_CHOICE, default=None, help="Palette used for the level badge")
@click.option("--color/--no-color", default=None, help="Force styled output on or off (default: detect terminal)")
@click.option("--timestamps/--no-timestamps", default=None, help="Show record timestamps")
@click.option("--width", type=click.IntRange(min=0), default=None, help="Wrap width for fields, 0 disables wrapping")
def cli_render(
    source: TextIO,
    theme: str | None,
    color: bool | None,
    timestamps: bool | None,
    width: int | None,
) -> None:
    """Render JSON-lines records from SOURCE (a file or ``-`` for stdin)."""

    config = _command_config(color=color, timestamps=timestamps, width=width, theme=theme)
    renderer = create_renderer(config)
    enabled = bool(config.color_enabled)
    for number, line in enumerate(source, start=1):
        if not line.strip():
            continue
        click.echo(renderer.render(_record_from_line(line, number)).text, color=enabled)


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the CLI and restore traceback preferences afterwards.

    Parameters
    ----------
    argv:
        Optional sequence of CLI arguments; ``None`` uses ``sys.argv``.

    Returns
    -------
    int
        Exit code reported by :func:`lib_cli_exit_tools.run_cli`.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
