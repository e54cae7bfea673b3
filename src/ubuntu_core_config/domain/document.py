"""Configuration document value objects and their wire representation.

Purpose
-------
Describe the fixed set of OS settings managed by the library as immutable
values and translate them to and from the nested mapping exchanged as YAML
(``config: ubuntu-core: {...}``). The module performs no I/O.

Contents
--------
* :class:`PassthroughEntry` – named file content copied verbatim.
* :class:`WatchdogConfig` – the startup/config text pair.
* :class:`ConfigurationDocument` – the full document.
* :func:`document_to_mapping` – render a document for serialisation.
* :func:`document_updates` – validate a parsed payload and return only the
  fields the caller supplied.

System Role
-----------
The orchestrator in :mod:`ubuntu_core_config.core` diffs the output of
:func:`document_updates` against a freshly built document and hands the
differences to the accessors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final, Mapping

from .errors import InvalidConfiguration

ROOT_KEY: Final[str] = "config"
SECTION_KEY: Final[str] = "ubuntu-core"
MODULES_KEY: Final[str] = "load-kernel-modules"

# Wire key -> dataclass attribute for the scalar text fields.
_TEXT_FIELDS: Final[dict[str, str]] = {
    "timezone": "timezone",
    "hostname": "hostname",
    "modprobe": "modprobe",
}


@dataclass(frozen=True, slots=True)
class PassthroughEntry:
    """A file under a passthrough root; empty ``content`` means "no file".

    Examples
    --------
    >>> PassthroughEntry(name="eth0", content="auto eth0").to_mapping()
    {'name': 'eth0', 'content': 'auto eth0'}
    """

    name: str
    content: str = ""

    def to_mapping(self) -> dict[str, str]:
        return {"name": self.name, "content": self.content}


@dataclass(frozen=True, slots=True)
class WatchdogConfig:
    """Watchdog startup defaults and daemon configuration, stored independently."""

    startup: str = ""
    config: str = ""

    def to_mapping(self) -> dict[str, str]:
        return {"startup": self.startup, "config": self.config}


@dataclass(frozen=True, slots=True)
class ConfigurationDocument:
    """Current (or desired) state of every managed setting.

    ``modules`` holds module names when read from the system and load/remove
    directives (``"name"`` / ``"-name"``) when supplied by a caller.
    """

    autopilot: bool = False
    timezone: str = ""
    hostname: str = ""
    modprobe: str = ""
    modules: tuple[str, ...] = ()
    interfaces: tuple[PassthroughEntry, ...] = field(default_factory=tuple)
    ppp: tuple[PassthroughEntry, ...] = field(default_factory=tuple)
    watchdog: WatchdogConfig | None = None


def document_to_mapping(document: ConfigurationDocument) -> dict[str, Any]:
    """Return the nested mapping emitted as YAML for *document*.

    ``autopilot``, ``timezone``, ``hostname`` and ``modprobe`` are always
    present; an empty module list, an empty network section and a missing
    watchdog are left out.

    Examples
    --------
    >>> document_to_mapping(ConfigurationDocument(timezone="UTC", hostname="box"))
    {'config': {'ubuntu-core': {'autopilot': False, 'timezone': 'UTC', 'hostname': 'box', 'modprobe': ''}}}
    """

    section: dict[str, Any] = {
        "autopilot": document.autopilot,
        "timezone": document.timezone,
        "hostname": document.hostname,
        "modprobe": document.modprobe,
    }
    if document.modules:
        section[MODULES_KEY] = list(document.modules)
    network: dict[str, Any] = {}
    if document.interfaces:
        network["interfaces"] = [entry.to_mapping() for entry in document.interfaces]
    if document.ppp:
        network["ppp"] = [entry.to_mapping() for entry in document.ppp]
    if network:
        section["network"] = network
    if document.watchdog is not None:
        section["watchdog"] = document.watchdog.to_mapping()
    return {ROOT_KEY: {SECTION_KEY: section}}


def document_updates(payload: object) -> dict[str, Any]:
    """Validate a parsed YAML *payload* and return the fields it sets.

    Keys of the result are :class:`ConfigurationDocument` attribute names so
    callers can apply them with :func:`dataclasses.replace`. Keys that are
    absent or ``null`` in the payload are omitted, which is how partial
    updates leave settings untouched.

    Raises
    ------
    InvalidConfiguration
        When ``config.ubuntu-core`` is missing or a field has the wrong shape.

    Examples
    --------
    >>> document_updates({"config": {"ubuntu-core": {"hostname": "box", "autopilot": None}}})
    {'hostname': 'box'}
    >>> document_updates({"config": None})
    Traceback (most recent call last):
    ...
    ubuntu_core_config.domain.errors.InvalidConfiguration: Missing 'config.ubuntu-core' section
    """

    section = _section(payload)
    updates: dict[str, Any] = {}

    autopilot = section.get("autopilot")
    if autopilot is not None:
        if not isinstance(autopilot, bool):
            raise InvalidConfiguration(f"'autopilot' must be a boolean, got {autopilot!r}")
        updates["autopilot"] = autopilot

    for key, attribute in _TEXT_FIELDS.items():
        value = section.get(key)
        if value is not None:
            updates[attribute] = _text(value, key)
    if "timezone" in updates:
        _check_zone_name(updates["timezone"])

    modules = section.get(MODULES_KEY)
    if modules is not None:
        if not isinstance(modules, list):
            raise InvalidConfiguration(f"'{MODULES_KEY}' must be a list of module names")
        updates["modules"] = tuple(_module_directive(item) for item in modules)

    network = section.get("network")
    if network is not None:
        if not isinstance(network, Mapping):
            raise InvalidConfiguration("'network' must be a mapping")
        for key in ("interfaces", "ppp"):
            entries = network.get(key)
            if entries is not None:
                updates[key] = _passthrough_entries(entries, f"network.{key}")

    watchdog = section.get("watchdog")
    if watchdog is not None:
        if not isinstance(watchdog, Mapping):
            raise InvalidConfiguration("'watchdog' must be a mapping")
        updates["watchdog"] = WatchdogConfig(
            startup=_optional_text(watchdog.get("startup"), "watchdog.startup"),
            config=_optional_text(watchdog.get("config"), "watchdog.config"),
        )
    return updates


def _section(payload: object) -> Mapping[str, Any]:
    """Return the ``config.ubuntu-core`` mapping or raise ``InvalidConfiguration``."""

    root = payload.get(ROOT_KEY) if isinstance(payload, Mapping) else None
    section = root.get(SECTION_KEY) if isinstance(root, Mapping) else None
    if not isinstance(section, Mapping):
        raise InvalidConfiguration(f"Missing '{ROOT_KEY}.{SECTION_KEY}' section")
    return section


def _text(value: object, key: str) -> str:
    if not isinstance(value, str):
        raise InvalidConfiguration(f"'{key}' must be a string, got {value!r}")
    return value


def _optional_text(value: object, key: str) -> str:
    """Like :func:`_text`, but a missing (``None``) value reads as ``""``."""

    return "" if value is None else _text(value, key)


def _check_zone_name(name: str) -> None:
    """Reject zone names that would resolve outside the zoneinfo tree.

    Examples
    --------
    >>> _check_zone_name("America/Argentina/Mendoza")
    >>> _check_zone_name("../../etc/shadow")
    Traceback (most recent call last):
    ...
    ubuntu_core_config.domain.errors.InvalidConfiguration: Invalid timezone name: '../../etc/shadow'
    """

    if not name:
        return
    escapes = name.startswith("/") or any(part in {"", ".", ".."} for part in name.split("/"))
    if escapes or "\0" in name or "\\" in name:
        raise InvalidConfiguration(f"Invalid timezone name: {name!r}")


def _module_directive(value: object) -> str:
    """Validate one ``load-kernel-modules`` item; each must fit on one module-file line."""

    directive = _text(value, MODULES_KEY)
    if any(char in directive for char in "\n\r\0"):
        raise InvalidConfiguration(f"'{MODULES_KEY}' entries must be single names, got {directive!r}")
    name = directive.strip().removeprefix("-").strip()
    if name.startswith(("#", ";")):
        raise InvalidConfiguration(f"'{MODULES_KEY}' entry looks like a comment: {directive!r}")
    return directive


def _passthrough_entries(entries: object, key: str) -> tuple[PassthroughEntry, ...]:
    """Validate a list of ``{name, content}`` mappings."""

    if not isinstance(entries, list):
        raise InvalidConfiguration(f"'{key}' must be a list of entries")
    result = []
    for item in entries:
        if not isinstance(item, Mapping):
            raise InvalidConfiguration(f"'{key}' entries must be mappings with name and content")
        name = _text(item.get("name"), f"{key}.name")
        if not name or name in {".", ".."} or any(char in name for char in "/\\\0"):
            raise InvalidConfiguration(f"'{key}' entry has an invalid name: {name!r}")
        content = _optional_text(item.get("content"), f"{key}.content")
        result.append(PassthroughEntry(name=name, content=content))
    return tuple(result)


__all__ = [
    "ROOT_KEY",
    "SECTION_KEY",
    "MODULES_KEY",
    "PassthroughEntry",
    "WatchdogConfig",
    "ConfigurationDocument",
    "document_to_mapping",
    "document_updates",
]
