"""Detection of known firmware defects."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date

from .dmi import DMI


@dataclass
class Quirk:
    """A known firmware defect and how it was detected."""

    id: str = ""
    name: str = ""
    link: str = ""
    severity: str = ""
    method: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "link": self.link,
            "severity": self.severity,
            "method": self.method,
        }


@dataclass(frozen=True)
class _AffectedDevice:
    name: str
    name_field: str
    name_strict: bool
    date_from: date | None = None
    date_to: date | None = None


@dataclass(frozen=True)
class _UnaffectedVersion:
    name: str
    name_field: str
    name_strict: bool
    version: str
    version_field: str


@dataclass(frozen=True)
class _AffectedDateRange:
    date_from: date | None = None
    date_to: date | None = None


def _name_matches(table: DMI, name: str, name_field: str, strict: bool) -> bool:
    source = getattr(table, name_field)
    return source == name if strict else name in source


def _in_range(table: DMI, start: date | None, end: date | None) -> bool:
    firmware_date = table.firmware_date or date.min
    return (start is None or firmware_date >= start) and (end is None or firmware_date <= end)


def _is_unaffected_version(table: DMI, items: tuple[_UnaffectedVersion, ...]) -> bool:
    return any(
        _name_matches(table, item.name, item.name_field, item.name_strict)
        and getattr(table, item.version_field) == item.version
        for item in items
    )


def _is_affected_date(table: DMI, items: tuple[_AffectedDateRange, ...]) -> bool:
    return any(_in_range(table, item.date_from, item.date_to) for item in items)


def _is_affected_device(table: DMI, items: tuple[_AffectedDevice, ...]) -> bool:
    return any(
        _name_matches(table, item.name, item.name_field, item.name_strict)
        and _in_range(table, item.date_from, item.date_to)
        for item in items
    )


_FQ0001_UNAFFECTED = (
    # MSI MAG Z490 TOMAHAWK
    _UnaffectedVersion("MS-7C80", "product_name", True, "1.B0", "firmware_version"),
    # MSI H310M PRO-C
    _UnaffectedVersion("MS-7D02", "product_name", True, "1.20", "firmware_version"),
    # MSI MPG X670E CARBON WIFI
    _UnaffectedVersion("MS-7D70", "product_name", True, "1.K0", "firmware_version"),
)

_FQ0001_DATES = (_AffectedDateRange(date_from=date(2022, 5, 10)),)

_FQ0001_DEVICES = (
    # MSI AMD boards
    _AffectedDevice("X570", "board_name", False, date(2021, 12, 16)),
    _AffectedDevice("X470", "board_name", False, date(2021, 9, 28)),
    _AffectedDevice("B550", "board_name", False, date(2021, 12, 13)),
    _AffectedDevice("B450", "board_name", False, date(2021, 12, 13)),
    _AffectedDevice("B350", "board_name", False, date(2021, 11, 1)),
    _AffectedDevice("A520", "board_name", False, date(2021, 9, 11)),
    # MSI Intel boards
    _AffectedDevice("Z590", "board_name", False, date(2021, 9, 6)),
    _AffectedDevice("Z490", "board_name", False, date(2021, 9, 30)),
    _AffectedDevice("B560", "board_name", False, date(2021, 9, 9)),
    _AffectedDevice("B460", "board_name", False, date(2021, 10, 22)),
    _AffectedDevice("H510", "board_name", False, date(2021, 9, 10)),
    _AffectedDevice("H410", "board_name", False, date(2021, 10, 22)),
)

_MSI_VENDOR = "Micro-Star International Co., Ltd."
_DESKTOP_CHASSIS = "3"


def _fq0001(method: str) -> Quirk:
    return Quirk(
        id="FQ0001",
        name="Defaults to executing on Secure Boot policy violation",
        severity="CRITICAL",
        method=method,
    )


def detect_fq0001(table: DMI) -> Quirk | None:
    """Return the FQ0001 quirk with its detection method, or None if unaffected."""
    if table.board_vendor != _MSI_VENDOR or table.chassis_type != _DESKTOP_CHASSIS:
        return None
    if _is_unaffected_version(table, _FQ0001_UNAFFECTED):
        return None
    if _is_affected_date(table, _FQ0001_DATES):
        return _fq0001("date")
    if _is_affected_device(table, _FQ0001_DEVICES):
        return _fq0001("device_name")
    return None


def _link(quirk_id: str) -> str:
    base = os.environ.get("SBCTL_QUIRK_LINK_BASE", "")
    if not base:
        return quirk_id
    return base.rstrip("/") + "/" + quirk_id


def check_firmware_quirks(table: DMI) -> list[Quirk]:
    """Return every known quirk that applies to the machine described by ``table``."""
    quirks = [quirk for quirk in (detect_fq0001(table),) if quirk is not None]
    for quirk in quirks:
        quirk.link = _link(quirk.id)
    return quirks