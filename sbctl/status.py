"""Secure Boot status of the running system."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .config import State
from .dmi import parse_dmi
from .fsutil import read_file
from .output import Printer, warnf
from .quirks import Quirk, check_firmware_quirks

EFI_GLOBAL_GUID = "8be4df61-93ca-11d2-aa0d-00e098032b8c"
EFIVARS_DIRECTORY = "/sys/firmware/efi/efivars"
SETUP_MODE_VAR = f"{EFIVARS_DIRECTORY}/SetupMode-{EFI_GLOBAL_GUID}"
SECURE_BOOT_VAR = f"{EFIVARS_DIRECTORY}/SecureBoot-{EFI_GLOBAL_GUID}"

# efivarfs files start with a 32-bit attribute field before the value.
_ATTRIBUTE_SIZE = 4


class NotBootedWithUEFIError(RuntimeError):
    """The system exposes no UEFI variables."""

    def __init__(self, message: str = "system is not booted with UEFI") -> None:
        super().__init__(message)


@dataclass
class Status:
    """What is known about the Secure Boot state of the machine."""

    installed: bool = False
    guid: str = ""
    setup_mode: bool = False
    secure_boot: bool = False
    vendors: list[str] = field(default_factory=list)
    firmware_quirks: list[Quirk] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "installed": self.installed,
            "guid": self.guid,
            "setup_mode": self.setup_mode,
            "secure_boot": self.secure_boot,
            "vendors": list(self.vendors),
            "firmware_quirks": [quirk.to_dict() for quirk in self.firmware_quirks],
        }


def read_efivar_bool(path: str) -> bool:
    """Read a boolean UEFI variable from efivarfs; missing or short values are false."""
    try:
        data = read_file(path)
    except OSError:
        return False
    if len(data) <= _ATTRIBUTE_SIZE:
        return False
    return data[_ATTRIBUTE_SIZE] == 1


def collect_status(state: State) -> Status:
    """Gather the Secure Boot status of the system described by ``state``."""
    try:
        with open(state.resolve(SETUP_MODE_VAR), "rb"):
            pass
    except FileNotFoundError as exc:
        raise NotBootedWithUEFIError() from exc
    except OSError:
        pass

    status = Status()
    if state.is_installed():
        status.installed = True
        try:
            status.guid = str(state.config.get_guid(state.root))
        except (OSError, ValueError):
            status.guid = ""
    status.setup_mode = read_efivar_bool(state.resolve(SETUP_MODE_VAR))
    status.secure_boot = read_efivar_bool(state.resolve(SECURE_BOOT_VAR))
    status.firmware_quirks = check_firmware_quirks(parse_dmi(state.root))
    return status


def print_status(status: Status, printer: Printer) -> None:
    """Print ``status`` in human readable form."""
    printer.print("Installed:\t")
    if status.installed:
        printer.ok("sbctl is installed")
        if status.guid:
            printer.print("Owner GUID:\t")
            printer.println(status.guid)
    else:
        printer.not_ok("sbctl is not installed")

    printer.print("Setup Mode:\t")
    if status.setup_mode:
        printer.not_ok("Enabled")
    else:
        printer.ok("Disabled")

    printer.print("Secure Boot:\t")
    if status.secure_boot:
        printer.ok("Enabled")
    else:
        printer.not_ok("Disabled")

    printer.print("Vendor Keys:\t")
    printer.println(" ".join(status.vendors) if status.vendors else "none")

    if status.firmware_quirks:
        printer.print("Firmware:\t")
        printer.print(warnf("Your firmware has known quirks"))
        for quirk in status.firmware_quirks:
            printer.println(
                f"\t\t- {quirk.id}: {quirk.name} ({quirk.severity})\n\t\t  {quirk.link}"
            )