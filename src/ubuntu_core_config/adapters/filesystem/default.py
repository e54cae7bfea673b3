"""Local filesystem adapter.

Purpose
-------
Implement the :class:`ubuntu_core_config.application.ports.FileStore` protocol
on top of :mod:`pathlib`. It is the only component that touches files, so
error translation (``OSError`` → domain errors) and debug logging live in one
place.

Contents
--------
* :class:`LocalFileStore` – whole-file read/write/remove/list/copy helpers.

System Role
-----------
Shared by the timezone adapter and by the modprobe, module list, passthrough
and watchdog accessors.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from ...domain.errors import NotFound, StorageError
from ...observability import log_debug, log_error


class LocalFileStore:
    """Text file storage rooted in the real filesystem.

    Content is read and written as UTF-8 without newline translation so
    passthrough files round-trip byte for byte.
    """

    def read_text(self, path: str) -> str:
        """Return the contents of *path*.

        Raises
        ------
        NotFound
            When *path* (or one of its parents) does not exist.
        StorageError
            For any other failure, e.g. *path* is a directory.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> target = Path(tmp.name) / "hostname"
        >>> _ = target.write_text("box", encoding="utf-8")
        >>> LocalFileStore().read_text(str(target))
        'box'
        >>> tmp.cleanup()
        """

        try:
            with open(path, encoding="utf-8", newline="") as handle:
                content = handle.read()
        except FileNotFoundError as exc:
            raise NotFound(f"File not found: {path}") from exc
        except (OSError, ValueError) as exc:
            log_error("file_read_failed", path=path, error=str(exc))
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        log_debug("file_read", path=path, size=len(content))
        return content

    def write_text(self, path: str, content: str, *, create_parents: bool = False) -> None:
        """Overwrite *path* with *content*."""

        target = Path(path)
        try:
            if create_parents:
                target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        except (OSError, ValueError) as exc:
            log_error("file_write_failed", path=path, error=str(exc))
            raise StorageError(f"Cannot write {path}: {exc}") from exc
        log_debug("file_written", path=path, size=len(content))

    def replace_text(self, path: str, content: str) -> None:
        """Write *content* to a temporary sibling of *path* and rename it into place.

        The parent directory must already exist.
        """

        target = Path(path)
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=target.parent,
                prefix=f".{target.name}.",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(content)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, target)
        except (OSError, ValueError) as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            log_error("file_write_failed", path=path, error=str(exc))
            raise StorageError(f"Cannot write {path}: {exc}") from exc
        log_debug("file_replaced", path=path, size=len(content))

    def remove(self, path: str) -> None:
        """Delete *path* if present."""

        try:
            Path(path).unlink(missing_ok=True)
        except (OSError, ValueError) as exc:
            log_error("file_remove_failed", path=path, error=str(exc))
            raise StorageError(f"Cannot remove {path}: {exc}") from exc
        log_debug("file_removed", path=path)

    def list_files(self, root: str) -> list[str]:
        """Return the sorted names of regular files directly under *root*."""

        directory = Path(root)
        try:
            names = sorted(entry.name for entry in directory.iterdir() if entry.is_file())
        except FileNotFoundError as exc:
            raise NotFound(f"Directory not found: {root}") from exc
        except OSError as exc:
            log_error("directory_list_failed", path=root, error=str(exc))
            raise StorageError(f"Cannot list {root}: {exc}") from exc
        log_debug("directory_listed", path=root, files=len(names))
        return names

    def copy_file(self, source: str, target: str) -> None:
        """Replace *target* with a copy of *source*; an existing target is removed first."""

        if not Path(source).is_file():
            raise NotFound(f"File not found: {source}")
        try:
            if os.path.lexists(target):
                os.remove(target)
            shutil.copyfile(source, target)
        except OSError as exc:
            log_error("file_copy_failed", path=target, source=source, error=str(exc))
            raise StorageError(f"Cannot copy {source} to {target}: {exc}") from exc
        log_debug("file_copied", path=target, source=source)


__all__ = ["LocalFileStore"]
