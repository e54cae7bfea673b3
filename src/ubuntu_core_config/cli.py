"""CLI adapter for ``ubuntu_core_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose ``get`` and ``set`` on the command line so a management agent (or an
operator) can read and apply the configuration document without writing
Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_get` – prints the live configuration.
* :func:`cli_set` – applies YAML from a file or stdin and prints the result.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: calls :class:`ubuntu_core_config.core.CoreConfig` and leaves
exit-code policy to ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import sys
from importlib import metadata
from typing import Final, Optional, Sequence, TextIO

import lib_cli_exit_tools
import rich_click as click

from .core import CoreConfig

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "ubuntu_core_config"


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when metadata is unavailable."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Read and apply the Ubuntu Core system configuration document",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="ubuntu_core_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DISTRIBUTION} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_get() -> None:
    """Print the live configuration as YAML."""

    click.echo(CoreConfig().get(), nl=False)


@cli.command("set", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
def cli_set(source: TextIO) -> None:
    """Apply the YAML configuration in SOURCE (default: stdin) and print the result.

    Only settings present in SOURCE are changed; the printed document is the
    configuration re-read after applying them.
    """

    click.echo(CoreConfig().set(source.read()), nl=False)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
