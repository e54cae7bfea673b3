"""File-backed field accessors.

Purpose
-------
Get/set pairs for the settings that live entirely in plain files: the
modprobe blacklist text, the watchdog configuration pair, and the two
passthrough directories.
"""

from __future__ import annotations

from typing import Sequence

from ..domain.document import PassthroughEntry, WatchdogConfig
from ..domain.errors import NotFound
from ..observability import log_debug
from . import passthrough
from .ports import FileStore


class ModprobeAccessor:
    """Whole-file access to the modprobe blacklist; a missing file reads as ``""``."""

    def __init__(self, store: FileStore, path: str) -> None:
        self._store = store
        self._path = path

    def get_modprobe(self) -> str:
        try:
            content = self._store.read_text(self._path)
        except NotFound:
            content = ""
        log_debug("field_read", field="modprobe", path=self._path, size=len(content))
        return content

    def set_modprobe(self, content: str) -> None:
        self._store.write_text(self._path, content)
        log_debug("field_written", field="modprobe", path=self._path, size=len(content))


class WatchdogAccessor:
    """Access the watchdog startup defaults and daemon configuration files.

    When neither file exists there is no watchdog configuration (``None``);
    when only one exists the other half reads as ``""``.
    """

    def __init__(self, store: FileStore, startup_path: str, config_path: str) -> None:
        self._store = store
        self._startup_path = startup_path
        self._config_path = config_path

    def get_watchdog(self) -> WatchdogConfig | None:
        startup = self._read_optional(self._startup_path)
        config = self._read_optional(self._config_path)
        if startup is None and config is None:
            return None
        return WatchdogConfig(startup=startup or "", config=config or "")

    def set_watchdog(self, watchdog: WatchdogConfig) -> None:
        self._store.write_text(self._startup_path, watchdog.startup)
        self._store.write_text(self._config_path, watchdog.config)
        log_debug("field_written", field="watchdog", path=self._config_path)

    def _read_optional(self, path: str) -> str | None:
        try:
            return self._store.read_text(path)
        except NotFound:
            return None


class PassthroughAccessor:
    """Bind the passthrough reconciler to one root directory."""

    def __init__(self, store: FileStore, root: str, *, field: str) -> None:
        self._store = store
        self._root = root
        self._field = field

    def get_entries(self) -> list[PassthroughEntry]:
        entries = passthrough.get_all(self._store, self._root)
        log_debug("field_read", field=self._field, path=self._root, entries=len(entries))
        return entries

    def set_entries(self, entries: Sequence[PassthroughEntry]) -> None:
        passthrough.set_all(self._store, self._root, entries)
        log_debug("field_written", field=self._field, path=self._root, entries=len(entries))


__all__ = ["ModprobeAccessor", "WatchdogAccessor", "PassthroughAccessor"]
