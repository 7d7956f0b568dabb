"""Locating the EFI system partition and preparing boot images."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import tempfile
from typing import Any

ESP_LOCATIONS = ("/efi", "/boot", "/boot/efi")
ESP_PARTTYPE = "c12a7328-f81f-11d2-ba4b-00a0c93ec93b"
LEGACY_DATABASE_PATH = "/usr/share/secureboot/"

_LSBLK_COMMAND = (
    "lsblk",
    "--json",
    "--tree",
    "--output",
    "PARTTYPE,MOUNTPOINT,PTTYPE,FSTYPE",
)


class EspNotFoundError(LookupError):
    """No EFI system partition could be found."""

    def __init__(self, message: str = "failed to find EFI system partition") -> None:
        super().__init__(message)


def _text(entry: dict[str, Any], key: str) -> str:
    value = entry.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"failed to parse json: {key} must be a string")
    return value


def _mountpoints(entry: dict[str, Any]) -> list[str]:
    values = entry.get("mountpoints") or []
    if not isinstance(values, list):
        raise ValueError("failed to parse json: mountpoints must be a list")
    return [value if isinstance(value, str) else "" for value in values]


def _as_entry(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError("failed to parse json: block device must be an object")
    return value


def _check_device(entry: dict[str, Any], parent_pttype: str) -> str | None:
    """Return the ESP mount point of ``entry``, or None if it is not an ESP."""
    pttype = _text(entry, "pttype")
    if pttype != "gpt" and (pttype != "" and parent_pttype != "gpt"):
        return None
    if _text(entry, "fstype") != "vfat":
        return None
    if _text(entry, "parttype") != ESP_PARTTYPE:
        return None
    mountpoint = _text(entry, "mountpoint")
    if mountpoint in ESP_LOCATIONS:
        return mountpoint
    mountpoints = _mountpoints(entry)
    for location in ESP_LOCATIONS:
        if location in mountpoints:
            return location
    return None


def find_esp(data: bytes | str) -> str:
    """Find the ESP mount point in the JSON tree printed by ``lsblk``."""
    try:
        root = json.loads(data)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValueError(f"failed to parse json: {exc}") from exc
    if not isinstance(root, dict):
        raise ValueError("failed to parse json: expected an object")
    devices = root.get("blockdevices") or []
    if not isinstance(devices, list):
        raise ValueError("failed to parse json: blockdevices must be a list")

    for raw in devices:
        device = _as_entry(raw)
        found = _check_device(device, "")
        if found is not None:
            return found
        children = device.get("children") or []
        if not isinstance(children, list):
            raise ValueError("failed to parse json: children must be a list")
        # Only direct children are examined.
        parent_pttype = _text(device, "pttype")
        for child in children:
            found = _check_device(_as_entry(child), parent_pttype)
            if found is not None:
                return found
    raise EspNotFoundError()


def get_esp(root: str = "/") -> str:
    """Return the ESP path from the environment or from ``lsblk``."""
    for name in ("SYSTEMD_ESP_PATH", "ESP_PATH"):
        if name in os.environ:
            return os.environ[name]

    for location in ESP_LOCATIONS:
        # Touching a path below each candidate triggers any automount.
        probe = os.path.join(root, location.lstrip("/"), "does-not-exist")
        try:
            os.stat(probe)
        except OSError:
            pass

    result = subprocess.run(_LSBLK_COMMAND, capture_output=True, check=True)
    return find_esp(result.stdout)


def combine_files(microcode: str, initramfs: str, tmpdir: str = "/var/tmp") -> str:
    """Concatenate microcode and initramfs into a new temporary file and return its path."""
    for path in (microcode, initramfs):
        try:
            os.stat(path)
        except OSError as exc:
            raise type(exc)(exc.errno, f"{path}: {exc.strerror}") from exc

    fd, combined = tempfile.mkstemp(prefix="initramfs-", dir=tmpdir)
    try:
        with os.fdopen(fd, "wb") as target:
            with open(microcode, "rb") as source:
                try:
                    shutil.copyfileobj(source, target)
                except OSError as exc:
                    raise OSError(f"failed to append microcode file to output: {exc}") from exc
            with open(initramfs, "rb") as source:
                try:
                    shutil.copyfileobj(source, target)
                except OSError as exc:
                    raise OSError(f"failed to append initramfs file to output: {exc}") from exc
    except BaseException:
        os.unlink(combined)
        raise
    return combined