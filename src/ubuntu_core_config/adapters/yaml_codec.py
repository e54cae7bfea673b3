"""YAML parsing and emission for the configuration document.

Purpose
-------
Wrap :mod:`yaml` so parse and emit failures surface as domain errors and the
emitted text is stable enough for ``set(get())`` to echo its input verbatim.

Contents
--------
* :class:`DocumentDumper` – ``SafeDumper`` that keeps block style, renders
  empty strings as ``""`` and multi-line strings as literal blocks.
* :func:`load_yaml` – parse caller supplied text.
* :func:`dump_yaml` – render a mapping.
"""

from __future__ import annotations

from typing import Any, Final, Mapping

import yaml

from ..domain.errors import InvalidConfiguration, SerializationError
from ..observability import log_debug, log_error

# Plain scalars are never folded across lines.
_LINE_WIDTH: Final[int] = 1 << 16


class DocumentDumper(yaml.SafeDumper):
    """Safe dumper with presentation tweaks for text-heavy configuration."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if not data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style='"')
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


DocumentDumper.add_representer(str, _represent_str)


def load_yaml(text: str) -> Any:
    """Parse *text*; malformed YAML raises :class:`InvalidConfiguration`.

    Examples
    --------
    >>> load_yaml("config:\\n  ubuntu-core:\\n    hostname: box\\n")
    {'config': {'ubuntu-core': {'hostname': 'box'}}}
    >>> load_yaml("") is None
    True
    """

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        log_error("yaml_invalid", field="document", path=None, error=str(exc))
        raise InvalidConfiguration(f"Invalid YAML: {exc}") from exc
    log_debug("yaml_loaded", field="document", path=None)
    return data


def dump_yaml(data: Mapping[str, Any]) -> str:
    """Render *data* as block-style YAML preserving key order.

    Examples
    --------
    >>> print(dump_yaml({"config": {"ubuntu-core": {"autopilot": False, "modprobe": ""}}}), end="")
    config:
      ubuntu-core:
        autopilot: false
        modprobe: ""
    """

    try:
        return yaml.dump(
            data,
            Dumper=DocumentDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=_LINE_WIDTH,
        )
    except yaml.YAMLError as exc:
        log_error("yaml_emit_failed", field="document", path=None, error=str(exc))
        raise SerializationError(f"Cannot serialise configuration: {exc}") from exc


__all__ = ["DocumentDumper", "load_yaml", "dump_yaml"]
