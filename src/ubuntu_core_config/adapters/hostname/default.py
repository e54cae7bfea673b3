"""Kernel hostname adapter.

Purpose
-------
Implement :class:`ubuntu_core_config.application.ports.HostnameProvider` with
:func:`socket.gethostname` / :func:`socket.sethostname` plus a persistence
file so the name survives a reboot.
"""

from __future__ import annotations

import socket
from typing import Callable

from ...application.ports import FileStore
from ...domain.errors import StorageError
from ...domain.settings import CoreConfigSettings
from ...observability import log_debug, log_error


class SystemHostnameProvider:
    """Hostname accessor backed by the kernel and ``settings.hostname_file``.

    Parameters
    ----------
    settings:
        Supplies the persistence file location.
    store:
        File storage used for the persistence file.
    gethostname / sethostname:
        Kernel bindings; default to the :mod:`socket` functions and can be
        replaced in tests.
    """

    def __init__(
        self,
        settings: CoreConfigSettings,
        store: FileStore,
        *,
        gethostname: Callable[[], str] = socket.gethostname,
        sethostname: Callable[[str], None] | None = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._gethostname = gethostname
        self._sethostname = sethostname or socket.sethostname

    def get_hostname(self) -> str:
        try:
            hostname = self._gethostname()
        except OSError as exc:
            log_error("hostname_read_failed", field="hostname", path=None, error=str(exc))
            raise StorageError(f"Cannot read hostname: {exc}") from exc
        log_debug("field_read", field="hostname", path=None, value=hostname)
        return hostname

    def set_hostname(self, hostname: str) -> None:
        """Set the kernel hostname, then write the persistence file.

        Both steps must succeed; the first failure is raised.
        """

        try:
            self._sethostname(hostname)
        except OSError as exc:
            log_error("hostname_syscall_failed", field="hostname", path=None, error=str(exc))
            raise StorageError(f"Cannot set hostname to {hostname!r}: {exc}") from exc
        self._store.write_text(self._settings.hostname_file, hostname)
        log_debug("field_written", field="hostname", path=self._settings.hostname_file, value=hostname)


__all__ = ["SystemHostnameProvider"]
