"""Shared sandbox helpers for the test-suite.

``create_core_sandbox`` lays out a throwaway root with every backing file the
library touches (timezone name, zone data, passthrough directories, ...) and
returns :class:`CoreSandbox`, which can build a :class:`CoreConfig` wired to
in-memory hostname/service fakes.
"""

from __future__ import annotations

import dataclasses
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from ubuntu_core_config import CoreConfig, CoreConfigSettings
from ubuntu_core_config.adapters.filesystem.default import LocalFileStore
from ubuntu_core_config.adapters.timezone.default import FileTimezoneProvider

INITIAL_TIMEZONE = "America/Argentina/Cordoba"
INITIAL_HOSTNAME = "testhost"
ZONES = {
    "America/Argentina/Cordoba": b"TZif-cordoba",
    "America/Argentina/Mendoza": b"TZif-mendoza",
    "UTC": b"TZif-utc",
}


class FakeHostname:
    """Hostname provider keeping the name in memory."""

    def __init__(self, hostname: str = INITIAL_HOSTNAME) -> None:
        self.hostname = hostname
        self.calls: list[str] = []

    def get_hostname(self) -> str:
        return self.hostname

    def set_hostname(self, hostname: str) -> None:
        self.calls.append(hostname)
        self.hostname = hostname


class FakeService:
    """Autopilot controller keeping the state in memory."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self.calls: list[bool] = []

    def get_enabled(self) -> bool:
        return self.enabled

    def set_enabled(self, enabled: bool) -> None:
        self.calls.append(enabled)
        self.enabled = enabled


class RecordingTimezone(FileTimezoneProvider):
    """File timezone provider that counts ``set_timezone`` calls."""

    def __init__(self, settings: CoreConfigSettings) -> None:
        super().__init__(settings, LocalFileStore())
        self.calls: list[str] = []

    def set_timezone(self, timezone: str) -> None:
        self.calls.append(timezone)
        super().set_timezone(timezone)


@dataclass
class CoreSandbox:
    root: Path
    settings: CoreConfigSettings
    hostname: FakeHostname = field(default_factory=FakeHostname)
    service: FakeService = field(default_factory=FakeService)

    def path(self, name: str) -> Path:
        return Path(getattr(self.settings, name))

    def environ(self) -> dict[str, str]:
        """Return ``UBUNTU_CORE_CONFIG_*`` variables reproducing the sandbox settings."""

        environ: dict[str, str] = {}
        for item in dataclasses.fields(self.settings):
            value = getattr(self.settings, item.name)
            if isinstance(value, tuple):
                value = shlex.join(str(part) for part in value)
            environ[f"UBUNTU_CORE_CONFIG_{item.name.upper()}"] = value
        return environ

    def config(self, **overrides) -> CoreConfig:
        """Return a :class:`CoreConfig` using the sandbox settings and fakes."""

        kwargs = {"hostname": self.hostname, "service": self.service}
        kwargs.update(overrides)
        return CoreConfig(self.settings, **kwargs)


def create_core_sandbox(tmp_path: Path) -> CoreSandbox:
    """Create the sandbox directory tree under *tmp_path*."""

    writable = tmp_path / "writable"
    writable.mkdir()
    zoneinfo = tmp_path / "zoneinfo"
    for name, data in ZONES.items():
        target = zoneinfo / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    (writable / "timezone").write_text(INITIAL_TIMEZONE, encoding="utf-8")
    for directory in ("modprobe.d", "modules-load.d", "interfaces.d", "ppp", "default"):
        (tmp_path / directory).mkdir()

    settings = CoreConfigSettings(
        tz_file=str(writable / "timezone"),
        zoneinfo_root=str(zoneinfo),
        zoneinfo_target=str(writable / "localtime"),
        hostname_file=str(writable / "hostname"),
        modprobe_file=str(tmp_path / "modprobe.d" / "ubuntu-core.conf"),
        modules_file=str(tmp_path / "modules-load.d" / "ubuntu-core.conf"),
        interfaces_root=str(tmp_path / "interfaces.d"),
        ppp_root=str(tmp_path / "ppp"),
        watchdog_startup_file=str(tmp_path / "default" / "watchdog"),
        watchdog_config_file=str(tmp_path / "watchdog.conf"),
        systemctl="/bin/sh",
        autopilot_status_args=("-c", "echo disabled"),
        autopilot_enable_args=("-c", "true"),
        autopilot_start_args=("-c", "true"),
        autopilot_stop_args=("-c", "true"),
        autopilot_disable_args=("-c", "true"),
    )
    return CoreSandbox(root=tmp_path, settings=settings)


__all__ = [
    "INITIAL_TIMEZONE",
    "INITIAL_HOSTNAME",
    "ZONES",
    "FakeHostname",
    "FakeService",
    "RecordingTimezone",
    "CoreSandbox",
    "create_core_sandbox",
]
