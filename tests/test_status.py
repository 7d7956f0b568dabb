import io
import os

import pytest

from sbctl.config import State, default_config
from sbctl.output import Printer
from sbctl.quirks import Quirk
from sbctl.status import (
    SECURE_BOOT_VAR,
    SETUP_MODE_VAR,
    NotBootedWithUEFIError,
    Status,
    collect_status,
    print_status,
    read_efivar_bool,
)

ATTRS = b"\x06\x00\x00\x00"


def _place(root, path, data):
    target = os.path.join(str(root), path.lstrip("/"))
    os.makedirs(os.path.dirname(target), exist_ok=True)
    with open(target, "wb") as handle:
        handle.write(data)


def make_state(root, secure_boot, setup_mode, dmi=None):
    _place(root, SECURE_BOOT_VAR, ATTRS + (b"\x01" if secure_boot else b"\x00"))
    _place(root, SETUP_MODE_VAR, ATTRS + (b"\x01" if setup_mode else b"\x00"))
    for name, value in (dmi or {}).items():
        _place(root, "/sys/devices/virtual/dmi/id/" + name, value.encode() + b"\n")
    return State(config=default_config(), root=str(root))


def _fq0001(status):
    return [q for q in status.firmware_quirks if q.id == "FQ0001"]


def test_status_off(tmp_path):
    status = collect_status(make_state(tmp_path, secure_boot=False, setup_mode=True))
    assert status.secure_boot is False
    assert status.setup_mode is True


def test_status_on(tmp_path):
    status = collect_status(make_state(tmp_path, secure_boot=True, setup_mode=False))
    assert status.secure_boot is True
    assert status.setup_mode is False
    assert status.installed is False


def test_not_booted_with_uefi(tmp_path):
    state = State(config=default_config(), root=str(tmp_path))
    with pytest.raises(NotBootedWithUEFIError, match="system is not booted with UEFI"):
        collect_status(state)


def test_fq0001_date_method(tmp_path):
    state = make_state(tmp_path, True, False, {
        "bios_date": "01/06/2023",
        "bios_version": "A.30",
        "board_name": "PRO Z790-A WIFI (MS-7E07)",
        "board_vendor": "Micro-Star International Co., Ltd.",
        "chassis_type": "3",
        "product_name": "MS-7E07",
    })
    found = _fq0001(collect_status(state))
    assert len(found) == 1
    assert found[0].method == "date"


def test_fq0001_device_method(tmp_path):
    state = make_state(tmp_path, True, False, {
        "bios_date": "12/29/2021",
        "bios_version": "1.80",
        "board_name": "MAG X570 TOMAHAWK WIFI (MS-7C84)",
        "board_vendor": "Micro-Star International Co., Ltd.",
        "chassis_type": "3",
        "product_name": "MS-7C84",
    })
    found = _fq0001(collect_status(state))
    assert len(found) == 1
    assert found[0].method == "device_name"


def test_fq0001_explicitly_unaffected(tmp_path):
    state = make_state(tmp_path, True, False, {
        "bios_date": "03/31/2022",
        "bios_version": "1.B0",
        "board_name": "MAG Z490 TOMAHAWK (MS-7C80)",
        "board_vendor": "Micro-Star International Co., Ltd.",
        "chassis_type": "3",
        "product_name": "MS-7C80",
    })
    assert _fq0001(collect_status(state)) == []


def test_fq0001_wrong_chassis(tmp_path):
    state = make_state(tmp_path, True, False, {
        "bios_date": "01/06/2023",
        "bios_version": "A.30",
        "board_name": "PRO Z790-A WIFI (MS-7E07)",
        "board_vendor": "Micro-Star International Co., Ltd.",
        "chassis_type": "5",
        "product_name": "MS-7E07",
    })
    assert _fq0001(collect_status(state)) == []


def test_fq0001_wrong_vendor(tmp_path):
    state = make_state(tmp_path, True, False, {
        "bios_date": "01/06/2023",
        "bios_version": "A.30",
        "board_name": "PRO Z790-A WIFI (MS-7E07)",
        "board_vendor": "More-Security Issues Co., Ltd.",
        "chassis_type": "3",
        "product_name": "MS-7E07",
    })
    assert _fq0001(collect_status(state)) == []


def test_installed_reads_guid(tmp_path):
    state = make_state(tmp_path, True, False)
    conf = state.config
    os.makedirs(state.resolve(conf.keydir))
    owner = "00000000-0000-4000-8000-000000000001"
    _place(tmp_path, conf.guid, owner.encode())
    status = collect_status(state)
    assert status.installed is True
    assert status.guid == owner


def test_read_efivar_bool(tmp_path):
    path = tmp_path / "var"
    assert read_efivar_bool(str(path)) is False
    path.write_bytes(ATTRS)
    assert read_efivar_bool(str(path)) is False
    path.write_bytes(ATTRS + b"\x01")
    assert read_efivar_bool(str(path)) is True
    path.write_bytes(ATTRS + b"\x00")
    assert read_efivar_bool(str(path)) is False


def test_to_dict_keys(tmp_path):
    status = Status(secure_boot=True, firmware_quirks=[Quirk(id="FQ0001", method="date")])
    data = status.to_dict()
    assert data["secure_boot"] is True
    assert data["vendors"] == []
    assert data["firmware_quirks"][0]["id"] == "FQ0001"
    assert data["firmware_quirks"][0]["method"] == "date"


def test_print_status_not_installed(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    out = io.StringIO()
    print_status(Status(), Printer(output=out, error_output=io.StringIO()))
    text = out.getvalue()
    assert "Installed:\t" in text
    assert "sbctl is not installed" in text
    assert "Vendor Keys:\tnone\n" in text
    assert "Firmware:" not in text


def test_print_status_with_quirk(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    out = io.StringIO()
    quirk = Quirk(id="FQ0001", name="n", severity="CRITICAL", link="FQ0001")
    status = Status(installed=True, guid="abc", firmware_quirks=[quirk])
    print_status(status, Printer(output=out, error_output=io.StringIO()))
    text = out.getvalue()
    assert "sbctl is installed" in text
    assert "Owner GUID:\tabc\n" in text
    assert "Your firmware has known quirks" in text
    assert "- FQ0001: n (CRITICAL)" in text