"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the reconciler depends on so concrete OS
bindings can be swapped for in-memory fakes in tests or for alternate
backends on other images.

Contents
--------
* :class:`FileStore` – whole-file text storage used by every file-backed field.
* :class:`TimezoneProvider` – reads and installs the system timezone.
* :class:`HostnameProvider` – reads and sets the kernel hostname.
* :class:`ServiceController` – queries and toggles the autopilot service.
* :class:`CommandRunner` – executes a command and captures its result.
* :class:`CommandResult` – value returned by :class:`CommandRunner`.

System Role
-----------
These protocols enforce Dependency Inversion. The orchestrator receives one
implementation per port at construction time and never reaches for module
globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and combined stdout/stderr of a finished command."""

    argv: tuple[str, ...]
    returncode: int
    output: str


@runtime_checkable
class FileStore(Protocol):
    """Read and write whole text files.

    Implementations raise :class:`~ubuntu_core_config.domain.errors.NotFound`
    for missing files and :class:`~ubuntu_core_config.domain.errors.StorageError`
    for every other failure.
    """

    def read_text(self, path: str) -> str:
        """Return the full contents of *path*."""

    def write_text(self, path: str, content: str, *, create_parents: bool = False) -> None:
        """Replace *path* with *content*, optionally creating missing parent directories."""

    def replace_text(self, path: str, content: str) -> None:
        """Replace *path* through a temporary sibling so readers never see a partial file."""

    def remove(self, path: str) -> None:
        """Delete *path*; an already missing file is not an error."""

    def list_files(self, root: str) -> list[str]:
        """Return names of regular files directly under *root*."""

    def copy_file(self, source: str, target: str) -> None:
        """Replace *target* with a copy of *source*."""


@runtime_checkable
class TimezoneProvider(Protocol):
    """Access the configured system timezone."""

    def get_timezone(self) -> str:
        """Return the IANA zone name currently configured."""

    def set_timezone(self, timezone: str) -> None:
        """Install *timezone* as the system zone."""


@runtime_checkable
class HostnameProvider(Protocol):
    """Access the kernel hostname and its persisted copy."""

    def get_hostname(self) -> str:
        """Return the current hostname."""

    def set_hostname(self, hostname: str) -> None:
        """Set the kernel hostname and persist it."""


@runtime_checkable
class ServiceController(Protocol):
    """Query and toggle the autopilot service."""

    def get_enabled(self) -> bool:
        """Return whether the service is enabled."""

    def set_enabled(self, enabled: bool) -> None:
        """Enable and start, or stop and disable, the service."""


class CommandRunner(Protocol):
    """Run an external command to completion."""

    def __call__(self, argv: Sequence[str]) -> CommandResult:
        """Execute *argv* and return its result; raise ``ExternalCommandError`` if it cannot start."""


__all__ = [
    "CommandResult",
    "FileStore",
    "TimezoneProvider",
    "HostnameProvider",
    "ServiceController",
    "CommandRunner",
]
