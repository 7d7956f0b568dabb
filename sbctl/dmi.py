"""Reading the firmware's DMI identification table."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .fsutil import read_file

DMI_DIRECTORY = "/sys/devices/virtual/dmi/id/"


@dataclass
class DMI:
    """Board, firmware and product identification of the machine."""

    board_name: str = ""
    board_vendor: str = ""
    board_version: str = ""
    chassis_type: str = ""
    firmware_date: date | None = None
    firmware_release: str = ""
    firmware_vendor: str = ""
    firmware_version: str = ""
    product_family: str = ""
    product_name: str = ""
    product_sku: str = ""
    product_version: str = ""
    system_vendor: str = ""

    def to_dict(self) -> dict[str, Any]:
        day = self.firmware_date or date.min
        return {
            "board_name": self.board_name,
            "board_vendor": self.board_vendor,
            "board_version": self.board_version,
            "chassis_type": self.chassis_type,
            "firmware_date": f"{day.isoformat()}T00:00:00Z",
            "firmware_release": self.firmware_release,
            "firmware_vendor": self.firmware_vendor,
            "firmware_version": self.firmware_version,
            "product_family": self.product_family,
            "product_name": self.product_name,
            "product_sku": self.product_sku,
            "product_version": self.product_version,
            "system_vendor": self.system_vendor,
        }


def _parse_date(value: str) -> date | None:
    try:
        return datetime.strptime(value, "%m/%d/%Y").date()
    except ValueError:
        return None


def parse_dmi(root: str = "/") -> DMI:
    """Read the DMI table below ``root``; unreadable entries are left empty."""
    directory = os.path.join(root, DMI_DIRECTORY.lstrip("/"))

    def read_value(name: str) -> str:
        try:
            raw = read_file(os.path.join(directory, name))
        except OSError:
            return ""
        return raw.decode("utf-8", errors="replace").strip()

    return DMI(
        board_name=read_value("board_name"),
        board_vendor=read_value("board_vendor"),
        board_version=read_value("board_version"),
        chassis_type=read_value("chassis_type"),
        firmware_date=_parse_date(read_value("bios_date")),
        firmware_release=read_value("bios_release"),
        firmware_vendor=read_value("bios_vendor"),
        firmware_version=read_value("bios_version"),
        product_family=read_value("product_family"),
        product_name=read_value("product_name"),
        product_sku=read_value("product_sku"),
        product_version=read_value("product_version"),
        system_vendor=read_value("sys_vendor"),
    )