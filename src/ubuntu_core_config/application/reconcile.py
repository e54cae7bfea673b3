"""Document builder and per-field reconciliation.

Purpose
-------
Read every managed setting into a :class:`ConfigurationDocument` and, given a
set of requested field values, call only the setters whose field differs from
live state.

Contents
--------
* :class:`FieldAccessors` – the bundle of accessors one reconciliation uses.
* :func:`build_document` – read live state in the fixed field order.
* :func:`changed_fields` – names of requested fields that differ from state.
* :func:`apply_updates` – invoke the setters for the changed fields.

System Role
-----------
Free of YAML and of concrete OS bindings; :mod:`ubuntu_core_config.core` wires
adapters into a :class:`FieldAccessors` and drives these functions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Final, Mapping

from ..domain.document import ConfigurationDocument
from ..observability import log_debug, log_info, make_event
from .accessors import ModprobeAccessor, PassthroughAccessor, WatchdogAccessor
from .modules import ModuleListAccessor
from .passthrough import passthrough_equal
from .ports import HostnameProvider, ServiceController, TimezoneProvider

#: Order in which fields are read and applied.
FIELD_ORDER: Final[tuple[str, ...]] = (
    "timezone",
    "autopilot",
    "hostname",
    "modprobe",
    "modules",
    "interfaces",
    "ppp",
    "watchdog",
)


@dataclass(frozen=True, slots=True)
class FieldAccessors:
    """One accessor per managed setting."""

    timezone: TimezoneProvider
    service: ServiceController
    hostname: HostnameProvider
    modprobe: ModprobeAccessor
    modules: ModuleListAccessor
    interfaces: PassthroughAccessor
    ppp: PassthroughAccessor
    watchdog: WatchdogAccessor


def build_document(accessors: FieldAccessors) -> ConfigurationDocument:
    """Return the live configuration.

    Reads happen in :data:`FIELD_ORDER`. The timezone read doubles as the
    "is this system usable at all" probe, so its failure (like every later
    one) aborts the build and propagates unchanged.
    """

    timezone = accessors.timezone.get_timezone()
    autopilot = accessors.service.get_enabled()
    document = ConfigurationDocument(
        autopilot=autopilot,
        timezone=timezone,
        hostname=accessors.hostname.get_hostname(),
        modprobe=accessors.modprobe.get_modprobe(),
        modules=tuple(accessors.modules.get_modules()),
        interfaces=tuple(accessors.interfaces.get_entries()),
        ppp=tuple(accessors.ppp.get_entries()),
        watchdog=accessors.watchdog.get_watchdog(),
    )
    log_debug("document_built", field="document", path=None)
    return document


def changed_fields(current: ConfigurationDocument, updates: Mapping[str, Any]) -> list[str]:
    """Return the fields in *updates* whose value differs from *current*, in apply order.

    Examples
    --------
    >>> current = ConfigurationDocument(timezone="UTC", hostname="box", modules=("foo",))
    >>> changed_fields(current, {"hostname": "box", "timezone": "Europe/Berlin", "modules": ("foo",)})
    ['timezone']
    """

    changed = []
    for name in FIELD_ORDER:
        if name not in updates:
            continue
        wanted = updates[name]
        present = getattr(current, name)
        if name in ("interfaces", "ppp"):
            differs = not passthrough_equal(wanted, present)
        elif name == "modules":
            differs = tuple(wanted) != tuple(present)
        else:
            differs = wanted != present
        if differs:
            changed.append(name)
        else:
            log_debug("field_unchanged", **make_event(name, None))
    return changed


def apply_updates(
    accessors: FieldAccessors,
    current: ConfigurationDocument,
    updates: Mapping[str, Any],
) -> list[str]:
    """Call the setter of every changed field and return their names.

    The first setter failure propagates immediately. Fields applied before it
    stay applied; nothing is rolled back.
    """

    setters: dict[str, Callable[[Any], None]] = {
        "timezone": accessors.timezone.set_timezone,
        "autopilot": accessors.service.set_enabled,
        "hostname": accessors.hostname.set_hostname,
        "modprobe": accessors.modprobe.set_modprobe,
        "modules": accessors.modules.set_modules,
        "interfaces": accessors.interfaces.set_entries,
        "ppp": accessors.ppp.set_entries,
        "watchdog": accessors.watchdog.set_watchdog,
    }
    applied = []
    for name in changed_fields(current, updates):
        setters[name](updates[name])
        applied.append(name)
        log_info("field_applied", **make_event(name, None))
    return applied


__all__ = ["FIELD_ORDER", "FieldAccessors", "build_document", "changed_fields", "apply_updates"]
