"""Service-control adapter for the autopilot timer.

Purpose
-------
Implement :class:`ubuntu_core_config.application.ports.ServiceController` by
shelling out to ``systemctl`` (or whatever ``settings.systemctl`` names) and
interpreting its exit status and output.

Contents
--------
* :func:`run_command` – default :class:`CommandRunner` built on
  :func:`subprocess.run`.
* :class:`SystemctlServiceController` – autopilot status/enable/disable.

System Role
-----------
Commands run synchronously without a timeout; a hung ``systemctl`` blocks the
calling ``set``.
"""

from __future__ import annotations

import subprocess
from typing import Final, Sequence

from ...application.ports import CommandResult, CommandRunner
from ...domain.errors import ExternalCommandError
from ...domain.settings import CoreConfigSettings
from ...observability import log_debug, log_error

ENABLED_TOKEN: Final[str] = "enabled"


def run_command(argv: Sequence[str]) -> CommandResult:
    """Run *argv* and capture stdout and stderr together.

    Raises
    ------
    ExternalCommandError
        When the executable cannot be started at all.

    Examples
    --------
    >>> run_command(["/bin/sh", "-c", "echo enabled"]).output
    'enabled\\n'
    """

    command = tuple(argv)
    try:
        completed = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as exc:
        log_error("command_spawn_failed", command=list(command), error=str(exc))
        raise ExternalCommandError(f"Cannot run {' '.join(command)}: {exc}", argv=command) from exc
    log_debug("command_finished", command=list(command), returncode=completed.returncode)
    return CommandResult(argv=command, returncode=completed.returncode, output=completed.stdout or "")


class SystemctlServiceController:
    """Autopilot toggle driven by ``systemctl`` style commands."""

    def __init__(self, settings: CoreConfigSettings, runner: CommandRunner = run_command) -> None:
        self._settings = settings
        self._run = runner

    def get_enabled(self) -> bool:
        """Return ``True`` for ``enabled``, ``False`` for a recognised disabled token.

        Raises
        ------
        ExternalCommandError
            When the status command exits with an unexpected status or prints
            anything else.
        """

        result = self._run(self._settings.autopilot_command("status"))
        if result.returncode not in self._settings.autopilot_status_exit_codes:
            raise self._failure("Autopilot status query failed", result)
        status = result.output.strip()
        if status == ENABLED_TOKEN:
            enabled = True
        elif status in self._settings.autopilot_disabled_tokens:
            enabled = False
        else:
            raise self._failure(f"Unrecognised autopilot unit status {status!r}", result)
        log_debug("field_read", field="autopilot", path=None, value=enabled)
        return enabled

    def set_enabled(self, enabled: bool) -> None:
        """Enable then start, or stop then disable; the first failing command aborts."""

        actions = ("enable", "start") if enabled else ("stop", "disable")
        for action in actions:
            result = self._run(self._settings.autopilot_command(action))
            if result.returncode != 0:
                raise self._failure(f"Autopilot {action} failed", result)
        log_debug("field_written", field="autopilot", path=None, value=enabled)

    @staticmethod
    def _failure(message: str, result: CommandResult) -> ExternalCommandError:
        log_error(
            "command_failed",
            field="autopilot",
            command=list(result.argv),
            returncode=result.returncode,
            output=result.output.strip(),
        )
        return ExternalCommandError(
            f"{message}: {' '.join(result.argv)} exited with {result.returncode}",
            argv=result.argv,
            returncode=result.returncode,
            output=result.output,
        )


__all__ = ["ENABLED_TOKEN", "run_command", "SystemctlServiceController"]
