"""Environment variable adapter.

Purpose
-------
Let deployments and test harnesses redirect any path or command in
:class:`~ubuntu_core_config.domain.settings.CoreConfigSettings` through
``UBUNTU_CORE_CONFIG_<FIELD>`` variables, e.g. ``UBUNTU_CORE_CONFIG_TZ_FILE``.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so unrelated variables are ignored.
* Ignores empty values, so ``UBUNTU_CORE_CONFIG_TZ_FILE=""`` means "use the default".
* Coerces values according to the type of the field default: tuples are split
  shell-style, integer tuples are parsed as integers.
* Emits structured logging via :mod:`ubuntu_core_config.observability`.
"""

from __future__ import annotations

import dataclasses
import os
import shlex
from typing import Final, Mapping

from ...domain.settings import CoreConfigSettings
from ...observability import log_debug

SLUG: Final[str] = "ubuntu-core-config"


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('ubuntu-core-config')
    'UBUNTU_CORE_CONFIG'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Collect non-empty environment variables that belong to the settings namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability."""

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str) -> dict[str, str]:
        """Return ``{lowercase_suffix: value}`` for variables starting with *prefix*.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'DEMO_TZ_FILE': '/tmp/tz', 'DEMO_EMPTY': '', 'OTHER': 'x'})
        >>> loader.load('DEMO')
        {'tz_file': '/tmp/tz'}
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, str] = {}
        for key, value in self._environ.items():
            if not key.startswith(prefix) or not value:
                continue
            stripped = key[len(prefix) :]
            if stripped:
                collected[stripped.lower()] = value
        log_debug("env_variables_loaded", field="settings", path=None, keys=sorted(collected))
        return collected


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    base: CoreConfigSettings | None = None,
) -> CoreConfigSettings:
    """Return *base* (or the defaults) with environment overrides applied.

    Unknown suffixes are ignored.

    Examples
    --------
    >>> env = {'UBUNTU_CORE_CONFIG_TZ_FILE': '/tmp/tz', 'UBUNTU_CORE_CONFIG_AUTOPILOT_STATUS_ARGS': '-c "echo enabled"'}
    >>> settings = load_settings(env)
    >>> settings.tz_file, settings.autopilot_status_args
    ('/tmp/tz', ('-c', 'echo enabled'))
    """

    settings = base or CoreConfigSettings()
    overrides = DefaultEnvLoader(environ=environ).load(default_env_prefix(SLUG))
    defaults = {field.name: getattr(settings, field.name) for field in dataclasses.fields(settings)}
    changes = {name: _coerce(value, defaults[name]) for name, value in overrides.items() if name in defaults}
    if not changes:
        return settings
    return dataclasses.replace(settings, **changes)


def _coerce(value: str, default: object) -> object:
    """Coerce *value* into the shape of *default*.

    Examples
    --------
    >>> _coerce('0 1', (0,)), _coerce('is-enabled unit', ('a',)), _coerce('/etc/x', '/etc/y')
    ((0, 1), ('is-enabled', 'unit'), '/etc/x')
    """

    if isinstance(default, tuple):
        parts = shlex.split(value)
        if default and all(isinstance(item, int) for item in default):
            return tuple(int(part) for part in parts)
        return tuple(parts)
    return value


__all__ = ["SLUG", "default_env_prefix", "DefaultEnvLoader", "load_settings"]
