"""Kernel module load-list reconciler.

Purpose
-------
Maintain the ``modules-load.d`` style file listing kernel modules to load at
boot. Callers send directives (``"name"`` adds, ``"-name"`` removes); the file
is always rewritten sorted, deduplicated and marked as machine managed.

Contents
--------
* :data:`HEADER` – comment block written at the top of the file.
* :func:`parse_module_lines` – extract module names from file text.
* :func:`apply_module_directives` – merge directives into a module list.
* :func:`render_module_file` – produce the file text for a module list.
* :class:`ModuleListAccessor` – binds the helpers to a :class:`FileStore`.

System Role
-----------
Used by the document builder (read) and the orchestrator (write). The pure
helpers carry no I/O so the merge rules can be tested directly.
"""

from __future__ import annotations

from typing import Final, Iterable

from ..domain.errors import NotFound
from ..observability import log_debug
from .ports import FileStore

HEADER: Final[str] = (
    "# This file is generated by ubuntu-core-config from the load-kernel-modules setting.\n"
    "# DO NOT EDIT: local changes are overwritten on the next configuration update.\n"
)

_COMMENT_PREFIXES: Final[tuple[str, ...]] = ("#", ";")


def parse_module_lines(text: str) -> list[str]:
    """Return module names from *text*, skipping blank and comment lines.

    A comment is any line whose first non-whitespace character is ``#`` or
    ``;``.

    Examples
    --------
    >>> parse_module_lines("# header\\n  ; note\\n\\n  oops  \\nfoo\\n")
    ['oops', 'foo']
    """

    modules = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIXES):
            continue
        modules.append(stripped)
    return modules


def apply_module_directives(current: Iterable[str], directives: Iterable[str]) -> list[str]:
    """Merge *directives* into *current* and return the sorted, deduplicated result.

    ``"name"`` adds a module and ``"-name"`` removes it; both are no-ops when
    the module is already present/absent. Directives that are blank or name
    nothing (``"-"``, ``"- "``) are ignored.

    Examples
    --------
    >>> apply_module_directives(["foo"], ["bar", "foo", "-baz"])
    ['bar', 'foo']
    >>> apply_module_directives(["bar", "foo"], ["-foo", "-", " "])
    ['bar']
    """

    modules = set(current)
    for directive in directives:
        directive = directive.strip()
        if directive.startswith("-"):
            modules.discard(directive[1:].strip())
        elif directive:
            modules.add(directive)
    modules.discard("")
    return sorted(modules)


def render_module_file(modules: Iterable[str]) -> str:
    """Return the file text for *modules*: the header then one name per line.

    Examples
    --------
    >>> render_module_file(["bar", "foo"]).splitlines()[-2:]
    ['bar', 'foo']
    """

    return HEADER + "".join(f"{module}\n" for module in modules)


class ModuleListAccessor:
    """Read and update the module list stored at *path*."""

    def __init__(self, store: FileStore, path: str) -> None:
        self._store = store
        self._path = path

    def get_modules(self) -> list[str]:
        """Return module names in file order; a missing file is an empty list."""

        try:
            text = self._store.read_text(self._path)
        except NotFound:
            log_debug("field_read", field="modules", path=self._path, value=[])
            return []
        modules = parse_module_lines(text)
        log_debug("field_read", field="modules", path=self._path, value=modules)
        return modules

    def set_modules(self, directives: Iterable[str]) -> None:
        """Apply *directives* and atomically rewrite the file.

        The containing directory must exist; it is not created.
        """

        modules = apply_module_directives(self.get_modules(), directives)
        self._store.replace_text(self._path, render_module_file(modules))
        log_debug("field_written", field="modules", path=self._path, value=modules)


__all__ = [
    "HEADER",
    "parse_module_lines",
    "apply_module_directives",
    "render_module_file",
    "ModuleListAccessor",
]
