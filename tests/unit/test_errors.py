from __future__ import annotations

from ubuntu_core_config.domain.errors import (
    CoreConfigError,
    ExternalCommandError,
    InvalidConfiguration,
    NotFound,
    SerializationError,
    StorageError,
)


def test_error_hierarchy() -> None:
    for cls in (InvalidConfiguration, StorageError, ExternalCommandError, SerializationError):
        assert issubclass(cls, CoreConfigError)
    assert issubclass(NotFound, StorageError)


def test_external_command_error_keeps_command_details() -> None:
    error = ExternalCommandError("boom", argv=["systemctl", "start"], returncode=3, output="nope\n")
    assert error.argv == ("systemctl", "start")
    assert error.returncode == 3
    assert error.output == "nope\n"
    assert str(error) == "boom"
