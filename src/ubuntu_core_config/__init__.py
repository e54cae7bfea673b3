"""Public package surface for ``ubuntu_core_config``.

Re-exports the orchestrator, the one-shot ``get_config``/``set_config``
helpers, the document value objects, the error taxonomy and the logging hooks
so callers can ``import ubuntu_core_config`` without reaching into
subpackages.
"""

from __future__ import annotations

from .adapters.env.default import load_settings
from .core import CoreConfig, get_config, set_config
from .domain.document import ConfigurationDocument, PassthroughEntry, WatchdogConfig
from .domain.errors import (
    CoreConfigError,
    ExternalCommandError,
    InvalidConfiguration,
    NotFound,
    SerializationError,
    StorageError,
)
from .domain.settings import CoreConfigSettings
from .observability import bind_trace_id, get_logger

__all__ = [
    "CoreConfig",
    "CoreConfigSettings",
    "ConfigurationDocument",
    "PassthroughEntry",
    "WatchdogConfig",
    "CoreConfigError",
    "InvalidConfiguration",
    "StorageError",
    "NotFound",
    "ExternalCommandError",
    "SerializationError",
    "get_config",
    "set_config",
    "load_settings",
    "bind_trace_id",
    "get_logger",
]
