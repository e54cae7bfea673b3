"""Composition root for ``ubuntu_core_config``.

Purpose
-------
Provide the two public operations, "get current configuration as YAML" and
"apply a YAML configuration and return the re-read result", by wiring the
default adapters into the reconciler.

Contents
--------
* :class:`CoreConfig` – orchestrator holding settings and injected ports.
* :func:`get_config` / :func:`set_config` – one-shot helpers using settings
  from the environment.

System Role
-----------
This is the only module that knows which concrete adapter backs each port.
Alternate backends or test fakes are passed to :class:`CoreConfig` directly.

Known limitation: ``set`` is not transactional. When a setter fails, fields
applied earlier in the same call remain applied.
"""

from __future__ import annotations

import uuid
from typing import Mapping

from .adapters.env.default import load_settings
from .adapters.filesystem.default import LocalFileStore
from .adapters.hostname.default import SystemHostnameProvider
from .adapters.service.systemctl import SystemctlServiceController
from .adapters.timezone.default import FileTimezoneProvider
from .adapters.yaml_codec import dump_yaml, load_yaml
from .application.accessors import ModprobeAccessor, PassthroughAccessor, WatchdogAccessor
from .application.modules import ModuleListAccessor
from .application.ports import FileStore, HostnameProvider, ServiceController, TimezoneProvider
from .application.reconcile import FieldAccessors, apply_updates, build_document
from .domain.document import ConfigurationDocument, document_to_mapping, document_updates
from .domain.errors import CoreConfigError
from .domain.settings import CoreConfigSettings
from .observability import bind_trace_id, log_error, log_info


class CoreConfig:
    """Reconcile the YAML configuration document with live system state.

    Parameters
    ----------
    settings:
        Paths and commands; defaults to :func:`load_settings` (built-in
        defaults plus ``UBUNTU_CORE_CONFIG_*`` overrides).
    store / timezone / hostname / service:
        Port implementations. Anything left out uses the default adapter.

    Examples
    --------
    >>> class Fixed:
    ...     def get_timezone(self): return "UTC"
    ...     def get_enabled(self): return False
    ...     def get_hostname(self): return "box"
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> settings = CoreConfigSettings(
    ...     modprobe_file=f"{tmp.name}/modprobe.conf",
    ...     modules_file=f"{tmp.name}/modules.conf",
    ...     interfaces_root=f"{tmp.name}/interfaces.d",
    ...     ppp_root=f"{tmp.name}/ppp",
    ...     watchdog_startup_file=f"{tmp.name}/watchdog",
    ...     watchdog_config_file=f"{tmp.name}/watchdog.conf",
    ... )
    >>> print(CoreConfig(settings, timezone=Fixed(), hostname=Fixed(), service=Fixed()).get(), end="")
    config:
      ubuntu-core:
        autopilot: false
        timezone: UTC
        hostname: box
        modprobe: ""
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        settings: CoreConfigSettings | None = None,
        *,
        store: FileStore | None = None,
        timezone: TimezoneProvider | None = None,
        hostname: HostnameProvider | None = None,
        service: ServiceController | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        store = store or LocalFileStore()
        self._accessors = FieldAccessors(
            timezone=timezone or FileTimezoneProvider(self.settings, store),
            service=service or SystemctlServiceController(self.settings),
            hostname=hostname or SystemHostnameProvider(self.settings, store),
            modprobe=ModprobeAccessor(store, self.settings.modprobe_file),
            modules=ModuleListAccessor(store, self.settings.modules_file),
            interfaces=PassthroughAccessor(store, self.settings.interfaces_root, field="interfaces"),
            ppp=PassthroughAccessor(store, self.settings.ppp_root, field="ppp"),
            watchdog=WatchdogAccessor(
                store,
                self.settings.watchdog_startup_file,
                self.settings.watchdog_config_file,
            ),
        )

    def document(self) -> ConfigurationDocument:
        """Return the live configuration as a value object."""

        return build_document(self._accessors)

    def get(self) -> str:
        """Return the live configuration as YAML.

        Raises
        ------
        CoreConfigError
            When any setting cannot be read or the document cannot be
            serialised.
        """

        bind_trace_id(uuid.uuid4().hex)
        try:
            return dump_yaml(document_to_mapping(self.document()))
        except CoreConfigError as exc:
            log_error("configuration_get_failed", field="document", path=None, error=str(exc))
            raise

    def set(self, text: str) -> str:
        """Apply the settings present in *text* and return the re-read configuration as YAML.

        Fields missing from *text* are left untouched. Only fields whose
        requested value differs from the live value are written.

        Raises
        ------
        InvalidConfiguration
            When *text* is not YAML or lacks the ``config.ubuntu-core`` mapping.
        CoreConfigError
            The first read or write failure; earlier writes are not undone.
        """

        bind_trace_id(uuid.uuid4().hex)
        try:
            updates = document_updates(load_yaml(text))
            return self._apply(updates)
        except CoreConfigError as exc:
            log_error("configuration_set_failed", field="document", path=None, error=str(exc))
            raise

    def _apply(self, updates: Mapping[str, object]) -> str:
        current = self.document()
        applied = apply_updates(self._accessors, current, updates)
        confirmed = self.document()
        log_info("configuration_applied", field="document", path=None, applied=applied)
        return dump_yaml(document_to_mapping(confirmed))


def get_config(settings: CoreConfigSettings | None = None) -> str:
    """Return the live configuration as YAML using default adapters."""

    return CoreConfig(settings).get()


def set_config(text: str, settings: CoreConfigSettings | None = None) -> str:
    """Apply *text* using default adapters and return the confirmed YAML."""

    return CoreConfig(settings).set(text)


__all__ = ["CoreConfig", "get_config", "set_config"]
