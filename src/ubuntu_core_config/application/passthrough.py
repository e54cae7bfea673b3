"""Passthrough reconciler shared by network interfaces and PPP settings.

Purpose
-------
Map a list of :class:`PassthroughEntry` values onto a directory where every
entry is one file named after the entry. Writes are additive: files that are
not mentioned stay as they are, and an entry with empty content removes its
file.

Contents
--------
* :func:`get_all` – read every regular file under a root.
* :func:`set_all` – write/remove the files for the given entries.
* :func:`passthrough_equal` – order-independent comparison of entry lists.
"""

from __future__ import annotations

import os
from typing import Iterable, Sequence

from ..domain.document import PassthroughEntry
from ..domain.errors import NotFound
from ..observability import log_debug
from .ports import FileStore


def get_all(store: FileStore, root: str) -> list[PassthroughEntry]:
    """Return one entry per regular file directly under *root*, sorted by name.

    A missing *root* means nothing has been configured yet and yields ``[]``.
    """

    try:
        names = store.list_files(root)
    except NotFound:
        log_debug("passthrough_root_missing", field="passthrough", path=root)
        return []
    return [PassthroughEntry(name=name, content=store.read_text(os.path.join(root, name))) for name in names]


def set_all(store: FileStore, root: str, entries: Iterable[PassthroughEntry]) -> None:
    """Write each entry under *root*; empty content deletes the file instead."""

    for entry in entries:
        path = os.path.join(root, entry.name)
        if entry.content:
            store.write_text(path, entry.content, create_parents=True)
        else:
            store.remove(path)


def passthrough_equal(a: Sequence[PassthroughEntry], b: Sequence[PassthroughEntry]) -> bool:
    """Return ``True`` when *a* and *b* hold the same name/content pairs.

    Examples
    --------
    >>> key = PassthroughEntry("key", "value")
    >>> passthrough_equal([key], [PassthroughEntry("key", "value")])
    True
    >>> passthrough_equal([], [key])
    False
    >>> passthrough_equal([key], [PassthroughEntry("other-key", "value")])
    False
    """

    if len(a) != len(b):
        return False
    return all(any(left.name == right.name and left.content == right.content for right in b) for left in a)


__all__ = ["get_all", "set_all", "passthrough_equal"]
