"""End-to-end CLI coverage for ``get``, ``set`` and ``info``.

Commands run with the sandbox expressed as ``UBUNTU_CORE_CONFIG_*`` variables,
so the default adapters are exercised; no test changes the hostname.
"""

from __future__ import annotations

import runpy
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

import lib_cli_exit_tools

from ubuntu_core_config import InvalidConfiguration, cli
from tests.support import ZONES, CoreSandbox, create_core_sandbox

SET_TIMEZONE = "config:\n  ubuntu-core:\n    timezone: America/Argentina/Mendoza\n"


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def _apply_env(sandbox: CoreSandbox, monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in sandbox.environ().items():
        monkeypatch.setenv(key, value)


def test_cli_get_prints_configuration(tmp_path: Path) -> None:
    sandbox = create_core_sandbox(tmp_path)
    result = _runner().invoke(cli.cli, ["get"], env=sandbox.environ())
    assert result.exit_code == 0
    assert result.output.startswith("config:\n  ubuntu-core:\n    autopilot: false\n    timezone: America/Argentina/Cordoba\n")
    assert result.output.endswith('    modprobe: ""\n')


def test_cli_set_from_file(tmp_path: Path) -> None:
    sandbox = create_core_sandbox(tmp_path)
    source = tmp_path / "desired.yaml"
    source.write_text(SET_TIMEZONE, encoding="utf-8")

    result = _runner().invoke(cli.cli, ["set", str(source)], env=sandbox.environ())

    assert result.exit_code == 0
    assert "    timezone: America/Argentina/Mendoza\n" in result.output
    assert sandbox.path("zoneinfo_target").read_bytes() == ZONES["America/Argentina/Mendoza"]


def test_cli_set_from_stdin(tmp_path: Path) -> None:
    sandbox = create_core_sandbox(tmp_path)
    text = "config:\n  ubuntu-core:\n    load-kernel-modules: [bar]\n"

    result = _runner().invoke(cli.cli, ["set"], input=text, env=sandbox.environ())

    assert result.exit_code == 0
    assert "    load-kernel-modules:\n    - bar\n" in result.output


def test_cli_set_rejects_invalid_document(tmp_path: Path) -> None:
    sandbox = create_core_sandbox(tmp_path)
    result = _runner().invoke(cli.cli, ["set"], input="config:\n", env=sandbox.environ())
    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidConfiguration)


def test_cli_info_handles_missing_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    sandbox = create_core_sandbox(tmp_path)
    _apply_env(sandbox, monkeypatch)

    exit_code = cli.main(["--traceback", "get"], restore_traceback=True)

    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback


def test_cli_main_reports_failure_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    sandbox = create_core_sandbox(tmp_path)
    sandbox.path("tz_file").unlink()
    _apply_env(sandbox, monkeypatch)

    assert cli.main(["get"]) != 0


def test_python_m_entry_point_runs_cli(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["ubuntu_core_config", "--help"])
    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("ubuntu_core_config", run_name="__main__")
    assert excinfo.value.code == 0
