"""Backing locations and commands used by the accessors.

Purpose
-------
Collect every filesystem path and service-control command in one immutable
value so deployments and tests can redirect them without touching module
globals. Defaults describe a stock Ubuntu Core image.

Contents
--------
* :data:`AUTOPILOT_UNIT` – systemd unit driving automatic updates.
* :class:`CoreConfigSettings` – frozen dataclass passed to the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

AUTOPILOT_UNIT: Final[str] = "snappy-autopilot.timer"


@dataclass(frozen=True, slots=True)
class CoreConfigSettings:
    """Paths and commands consulted by the default adapters.

    Attributes
    ----------
    tz_file:
        File holding the current timezone name.
    zoneinfo_root:
        Directory with compiled zone data (``<root>/<zone name>``).
    zoneinfo_target:
        "Current timezone" data file replaced whenever the zone changes.
    hostname_file:
        Persistence file written alongside the hostname system call.
    modprobe_file / modules_file:
        Kernel module blacklist text and load list.
    interfaces_root / ppp_root:
        Passthrough directories, one file per named entry.
    watchdog_startup_file / watchdog_config_file:
        The two watchdog configuration blobs.
    systemctl:
        Executable used for service control.
    autopilot_*_args:
        Arguments appended to ``systemctl`` for each autopilot action.
    autopilot_status_exit_codes:
        Exit statuses of the status query that still count as an answer.
    autopilot_disabled_tokens:
        Status outputs meaning "disabled"; ``enabled`` always means enabled.

    Examples
    --------
    >>> CoreConfigSettings().autopilot_command("status")
    ('systemctl', 'is-enabled', 'snappy-autopilot.timer')
    """

    tz_file: str = "/etc/writable/timezone"
    zoneinfo_root: str = "/usr/share/zoneinfo"
    zoneinfo_target: str = "/etc/writable/localtime"
    hostname_file: str = "/etc/writable/hostname"
    modprobe_file: str = "/etc/modprobe.d/ubuntu-core.conf"
    modules_file: str = "/etc/modules-load.d/ubuntu-core.conf"
    interfaces_root: str = "/etc/network/interfaces.d"
    ppp_root: str = "/etc/ppp"
    watchdog_startup_file: str = "/etc/default/watchdog"
    watchdog_config_file: str = "/etc/watchdog.conf"
    systemctl: str = "systemctl"
    autopilot_status_args: tuple[str, ...] = ("is-enabled", AUTOPILOT_UNIT)
    autopilot_enable_args: tuple[str, ...] = ("enable", AUTOPILOT_UNIT)
    autopilot_start_args: tuple[str, ...] = ("start", AUTOPILOT_UNIT)
    autopilot_stop_args: tuple[str, ...] = ("stop", AUTOPILOT_UNIT)
    autopilot_disable_args: tuple[str, ...] = ("disable", AUTOPILOT_UNIT)
    autopilot_status_exit_codes: tuple[int, ...] = (0,)
    autopilot_disabled_tokens: tuple[str, ...] = ("disabled",)

    def autopilot_command(self, action: str) -> tuple[str, ...]:
        """Return the full command line for ``status``/``enable``/``start``/``stop``/``disable``."""

        args = getattr(self, f"autopilot_{action}_args", None)
        if args is None:
            raise ValueError(f"Unknown autopilot action: {action}")
        return (self.systemctl, *args)


__all__ = ["AUTOPILOT_UNIT", "CoreConfigSettings"]
