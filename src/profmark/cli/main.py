# topmark:header:start
#
#   project      : ProfMark
#   file         : main.py
#   file_relpath : src/profmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The ``profmark`` command.

Resolves the configuration, instruments the target file or every matching
source file below the target directory, and reports the outcome through a
`ClickConsole`. Core exceptions are translated into sysexits-aligned exit
codes by `profmark.cli.errors.translate_error`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from profmark.cli.console import ClickConsole
from profmark.cli.errors import translate_error
from profmark.cli.exit_codes import ExitCode
from profmark.cli.options import CONTEXT_SETTINGS, common_verbose_options, resolve_verbosity
from profmark.config import load_config
from profmark.config.logging import get_logger, resolve_env_log_level, setup_logging
from profmark.constants import PROFMARK_VERSION
from profmark.processor import FileProcessor, MethodStatus
from profmark.utils.diff import render_patch

if TYPE_CHECKING:
    from profmark.cli.console import ConsoleLike
    from profmark.config import Config
    from profmark.config.logging import ProfmarkLogger
    from profmark.processor import FileResult

logger: ProfmarkLogger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int, no_color: bool) -> None:
    """Initialize shared state (verbosity, logging and console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` will be populated.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
    """
    ctx.obj = ctx.obj or {}

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    enable_color: bool = not no_color and click.get_text_stream("stdout").isatty()
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)


def report_file(
    console: ConsoleLike, result: FileResult, *, level: int, show_diff: bool, color: bool = False
) -> None:
    """Print the per-file progress line, method outcomes and optional diff."""
    if level <= logging.WARNING:
        console.print(f"Processing file: {result.path}")
        if result.mixed_newlines:
            console.warn(f"  mixed line endings in {result.path}, normalized")

    if level <= logging.INFO:
        for method in result.methods:
            if method.status is MethodStatus.INSTRUMENTED:
                status = console.styled(
                    f"instrumented (+{method.inserted_lines} lines)", fg="green"
                )
            else:
                status = console.styled(method.status.value, fg="yellow")
            console.print(f"  {method.name} (line {method.line}): {status}")
            if level <= logging.DEBUG:
                for line in method.block_text:
                    console.print(f"    | {line}")
        if result.unfinished is not None:
            console.print(console.styled(f"  {result.unfinished}: block never closed", dim=True))

    if show_diff and result.changed:
        patch: str = result.unified_diff()
        console.print(render_patch(patch) if color else patch, nl=False)


def report_summary(
    console: ConsoleLike, results: list[FileResult], *, level: int, dry_run: bool
) -> None:
    """Print the closing summary line."""
    if level > logging.WARNING:
        return
    instrumented: int = sum(len(r.instrumented) for r in results)
    skipped: int = sum(len(r.skipped) for r in results)
    inserted: int = sum(r.inserted_lines for r in results)
    changed: int = sum(1 for r in results if r.changed)
    verb: str = "would change" if dry_run else "changed"
    console.print(
        f"{len(results)} file(s) processed, {changed} {verb}: "
        f"{instrumented} method(s) instrumented, {skipped} skipped, "
        f"{inserted} line(s) inserted."
    )


@click.command(
    name="profmark",
    context_settings=CONTEXT_SETTINGS,
    help="Insert profiler begin/end sample markers around every method body.",
)
@click.option(
    "-p",
    "--path",
    "target",
    type=click.Path(path_type=Path),
    default=None,
    help="A source file, or a folder whose matching files are all processed.",
)
@click.option(
    "--config",
    "config_paths",
    type=click.Path(path_type=Path),
    multiple=True,
    help="Additional TOML config file (repeatable; later files win).",
)
@click.option(
    "--no-config",
    is_flag=True,
    help="Do not discover profmark.toml or [tool.profmark] in the working directory.",
)
@click.option("--dry-run", is_flag=True, help="Compute changes without writing files.")
@click.option("--diff", "show_diff", is_flag=True, help="Print a unified diff per changed file.")
@click.option(
    "--dump-config",
    is_flag=True,
    help="Print the effective configuration as TOML and exit.",
)
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@common_verbose_options
@click.version_option(PROFMARK_VERSION, "--version", prog_name="profmark")
@click.pass_context
def cli(
    ctx: click.Context,
    target: Path | None,
    config_paths: tuple[Path, ...],
    no_config: bool,
    dry_run: bool,
    show_diff: bool,
    dump_config: bool,
    no_color: bool,
    verbose: int,
    quiet: int,
) -> None:
    """Entry point for the ProfMark CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ConsoleLike = ctx.obj["console"]
    level: int = ctx.obj["verbosity_level"]

    try:
        config: Config = load_config(config_paths=config_paths, no_config=no_config)
    except Exception as exc:
        raise translate_error(exc) from exc

    if dump_config:
        console.print(config.to_toml(), nl=False)
        ctx.exit(ExitCode.SUCCESS)

    if target is None:
        console.print(ctx.get_help())
        ctx.exit(ExitCode.USAGE_ERROR)

    processor = FileProcessor(config, dry_run=dry_run)
    try:
        results: list[FileResult] = []
        for result in processor.iter_process(target):
            report_file(
                console,
                result,
                level=level,
                show_diff=show_diff,
                color=ctx.obj["color_enabled"],
            )
            results.append(result)
    except Exception as exc:
        logger.debug("Processing failed", exc_info=True)
        raise translate_error(exc) from exc

    report_summary(console, results, level=level, dry_run=dry_run)

    if dry_run and any(r.changed for r in results):
        ctx.exit(ExitCode.WOULD_CHANGE)
    ctx.exit(ExitCode.SUCCESS)


if __name__ == "__main__":
    cli()
