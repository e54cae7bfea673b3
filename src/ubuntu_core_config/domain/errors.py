"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the reconciler, and the
command line wrapper. The hierarchy lives in the domain layer so adapters may
raise it without importing anything from the outer layers.

Contents
--------
* :class:`CoreConfigError` – umbrella base class for every failure.
* :class:`InvalidConfiguration` – malformed or incomplete YAML input.
* :class:`StorageError` – filesystem or kernel state could not be read/written.
* :class:`NotFound` – a missing-but-optional resource (subclass of
  :class:`StorageError`).
* :class:`ExternalCommandError` – a service-control command failed.
* :class:`SerializationError` – the document could not be emitted as YAML.

System Role
-----------
Callers catch :class:`CoreConfigError` to handle all library failures
uniformly. Nothing in the library logs-and-swallows these exceptions.
"""

from __future__ import annotations

from typing import Sequence


class CoreConfigError(Exception):
    """Base type for all exceptions emitted by ``ubuntu_core_config``."""


class InvalidConfiguration(CoreConfigError):
    """Raised when the requested configuration cannot be understood.

    Typical Sources
    ---------------
    Malformed YAML, a document without the ``config.ubuntu-core`` mapping, or a
    field holding a value of the wrong type.
    """


class StorageError(CoreConfigError):
    """Raised when persisted OS state cannot be read or written.

    Covers permission problems, directory-vs-file mismatches, missing parent
    directories and failures of the hostname system call.
    """


class NotFound(StorageError):
    """Represents a missing resource that some accessors treat as empty state.

    Why
    ----
    The modprobe, module list, passthrough and watchdog accessors consider an
    absent file a valid "nothing configured" state, while the timezone accessor
    does not. Raising a dedicated subclass lets each accessor decide.
    """


class ExternalCommandError(CoreConfigError):
    """Raised when a service-control command exits badly or says something unexpected.

    Attributes
    ----------
    argv:
        Command line that was executed.
    returncode:
        Exit status, or ``None`` when the process could not be started.
    output:
        Combined stdout/stderr captured from the process.
    """

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.argv = tuple(argv)
        self.returncode = returncode
        self.output = output


class SerializationError(CoreConfigError):
    """Raised when the configuration document cannot be rendered as YAML."""


__all__ = [
    "CoreConfigError",
    "InvalidConfiguration",
    "StorageError",
    "NotFound",
    "ExternalCommandError",
    "SerializationError",
]
