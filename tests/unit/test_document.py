"""Document value objects and the wire mapping."""

from __future__ import annotations

import pytest

from ubuntu_core_config.domain.document import (
    ConfigurationDocument,
    PassthroughEntry,
    WatchdogConfig,
    document_to_mapping,
    document_updates,
)
from ubuntu_core_config.domain.errors import InvalidConfiguration


def _wrap(section: object) -> dict[str, object]:
    return {"config": {"ubuntu-core": section}}


def test_mapping_omits_empty_optional_sections() -> None:
    mapping = document_to_mapping(ConfigurationDocument(timezone="UTC", hostname="box"))
    assert list(mapping["config"]["ubuntu-core"]) == ["autopilot", "timezone", "hostname", "modprobe"]


def test_mapping_includes_populated_sections_in_order() -> None:
    document = ConfigurationDocument(
        autopilot=True,
        timezone="UTC",
        hostname="box",
        modprobe="blacklist floppy\n",
        modules=("bar", "foo"),
        interfaces=(PassthroughEntry("eth0", "auto eth0"),),
        watchdog=WatchdogConfig(startup="run_watchdog=1", config="interval = 10"),
    )
    section = document_to_mapping(document)["config"]["ubuntu-core"]
    assert list(section) == [
        "autopilot",
        "timezone",
        "hostname",
        "modprobe",
        "load-kernel-modules",
        "network",
        "watchdog",
    ]
    assert section["load-kernel-modules"] == ["bar", "foo"]
    assert section["network"] == {"interfaces": [{"name": "eth0", "content": "auto eth0"}]}
    assert section["watchdog"] == {"startup": "run_watchdog=1", "config": "interval = 10"}


@pytest.mark.parametrize("payload", [None, "", {}, {"config": None}, _wrap(None), _wrap("text"), ["config"]])
def test_updates_require_ubuntu_core_section(payload) -> None:
    with pytest.raises(InvalidConfiguration):
        document_updates(payload)


def test_updates_only_contain_supplied_fields() -> None:
    updates = document_updates(_wrap({"autopilot": False, "timezone": "UTC", "modprobe": ""}))
    assert updates == {"autopilot": False, "timezone": "UTC", "modprobe": ""}


def test_updates_parse_network_and_watchdog() -> None:
    updates = document_updates(
        _wrap(
            {
                "load-kernel-modules": ["-foo", "bar"],
                "network": {"ppp": [{"name": "chap-secrets", "content": "password"}]},
                "watchdog": {"startup": "some startup"},
            }
        )
    )
    assert updates["modules"] == ("-foo", "bar")
    assert updates["ppp"] == (PassthroughEntry("chap-secrets", "password"),)
    assert "interfaces" not in updates
    assert updates["watchdog"] == WatchdogConfig(startup="some startup", config="")


def test_passthrough_entry_without_content_means_removal() -> None:
    updates = document_updates(_wrap({"network": {"interfaces": [{"name": "eth0"}]}}))
    assert updates["interfaces"] == (PassthroughEntry("eth0", ""),)


@pytest.mark.parametrize(
    "section",
    [
        {"autopilot": "yes"},
        {"hostname": 42},
        {"load-kernel-modules": "foo"},
        {"load-kernel-modules": [1]},
        {"network": ["eth0"]},
        {"network": {"interfaces": [{"name": "../eth0", "content": "x"}]}},
        {"network": {"interfaces": [{"name": "", "content": "x"}]}},
        {"network": {"ppp": [{"content": "x"}]}},
        {"watchdog": "on"},
        {"watchdog": {"startup": 0}},
        {"network": {"interfaces": [{"name": "eth0", "content": 0}]}},
        {"network": {"ppp": [{"name": "eth0", "content": False}]}},
        {"network": {"ppp": [{"name": "a\0b", "content": "x"}]}},
    ],
)
def test_updates_reject_ill_typed_fields(section) -> None:
    with pytest.raises(InvalidConfiguration):
        document_updates(_wrap(section))


@pytest.mark.parametrize(
    "timezone",
    ["/etc/shadow", "../secret", "America/../../secret", "America//Cordoba", "./UTC", "UTC\0", "America\\Cordoba"],
)
def test_updates_reject_timezones_outside_zoneinfo(timezone: str) -> None:
    with pytest.raises(InvalidConfiguration):
        document_updates(_wrap({"timezone": timezone}))


def test_updates_accept_nested_zone_names() -> None:
    assert document_updates(_wrap({"timezone": "America/Argentina/Mendoza"})) == {"timezone": "America/Argentina/Mendoza"}


@pytest.mark.parametrize("directive", ["foo\nbar", "foo\r", "fo\0o", "#foo", ";foo", "- #foo", "  ;foo"])
def test_updates_reject_module_directives_that_are_not_single_names(directive: str) -> None:
    with pytest.raises(InvalidConfiguration):
        document_updates(_wrap({"load-kernel-modules": [directive]}))


def test_updates_keep_module_directives_verbatim() -> None:
    updates = document_updates(_wrap({"load-kernel-modules": ["-foo", " bar ", "-"]}))
    assert updates == {"modules": ("-foo", " bar ", "-")}


def test_missing_watchdog_halves_read_as_empty() -> None:
    assert document_updates(_wrap({"watchdog": {"config": "interval = 10"}})) == {
        "watchdog": WatchdogConfig(startup="", config="interval = 10")
    }
