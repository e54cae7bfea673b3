"""File-backed timezone adapter.

Purpose
-------
Implement :class:`ubuntu_core_config.application.ports.TimezoneProvider` the
way Ubuntu Core stores the zone: a text file with the zone name plus a copy of
the compiled zone data at the "current timezone" location.
"""

from __future__ import annotations

import os

from ...application.ports import FileStore
from ...domain.errors import NotFound, StorageError
from ...domain.settings import CoreConfigSettings
from ...observability import log_debug, log_error


class FileTimezoneProvider:
    """Read the zone name from ``settings.tz_file`` and install zone data on change."""

    def __init__(self, settings: CoreConfigSettings, store: FileStore) -> None:
        self._settings = settings
        self._store = store

    def get_timezone(self) -> str:
        """Return the configured zone name.

        A missing or unreadable name file is an error; no default zone is
        substituted.
        """

        path = self._settings.tz_file
        try:
            timezone = self._store.read_text(path).strip()
        except StorageError as exc:
            log_error("timezone_read_failed", field="timezone", path=path, error=str(exc))
            raise
        log_debug("field_read", field="timezone", path=path, value=timezone)
        return timezone

    def set_timezone(self, timezone: str) -> None:
        """Persist *timezone* and replace the installed zone data with its zoneinfo file.

        Raises
        ------
        StorageError
            When *timezone* does not name a file inside ``zoneinfo_root`` or
            either write fails.
        """

        root = os.path.abspath(self._settings.zoneinfo_root)
        source = os.path.abspath(os.path.join(root, timezone))
        if "\0" in timezone or os.path.commonpath([root, source]) != root or source == root:
            log_error("timezone_rejected", field="timezone", path=source, value=timezone)
            raise StorageError(f"Timezone {timezone!r} does not name a file under {self._settings.zoneinfo_root}")
        try:
            self._store.copy_file(source, self._settings.zoneinfo_target)
        except NotFound as exc:
            log_error("timezone_unknown", field="timezone", path=source, error=str(exc))
            raise StorageError(f"No zone data for timezone {timezone!r} under {self._settings.zoneinfo_root}") from exc
        self._store.write_text(self._settings.tz_file, timezone)
        log_debug("field_written", field="timezone", path=self._settings.zoneinfo_target, value=timezone)


__all__ = ["FileTimezoneProvider"]
