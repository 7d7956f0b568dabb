"""Configuration and runtime state."""

from __future__ import annotations

import os
import posixpath
import uuid
from dataclasses import dataclass, field
from typing import Any

import yaml

from .fsutil import read_file

DEFAULT_DIRECTORY = "/var/lib/sbctl"


class ConfigError(ValueError):
    """The configuration file could not be understood."""


def _under(root: str, path: str) -> str:
    if not root or root == "/":
        return path
    return os.path.join(root, path.lstrip("/"))


def _exists(path: str) -> bool:
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def _string(key: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"{key}: expected a string, got {value!r}")
    return value


@dataclass
class FileConfig:
    """A file to sign and its optional output path."""

    path: str = ""
    output: str = ""

    def to_dict(self) -> dict[str, str]:
        data = {"path": self.path}
        if self.output:
            data["output"] = self.output
        return data


@dataclass
class KeyConfig:
    """Where a key and its certificate live and which backend holds it."""

    privkey: str = ""
    pubkey: str = ""
    type: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        data = {"privkey": self.privkey, "pubkey": self.pubkey, "type": self.type}
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class Keys:
    """The key configurations of the PK, KEK and db levels."""

    pk: KeyConfig | None = None
    kek: KeyConfig | None = None
    db: KeyConfig | None = None

    def key_configs(self) -> list[KeyConfig | None]:
        return [self.pk, self.kek, self.db]

    def to_dict(self) -> dict[str, Any]:
        return {
            name: (conf.to_dict() if conf is not None else None)
            for name, conf in (("pk", self.pk), ("kek", self.kek), ("db", self.db))
        }


@dataclass
class Config:
    """Paths and settings the tool works with."""

    landlock: bool = False
    keydir: str = ""
    guid: str = ""
    files_db: str = ""
    bundles_db: str = ""
    db_additions: list[str] = field(default_factory=list)
    files: list[FileConfig] = field(default_factory=list)
    keys: Keys | None = None

    def get_guid(self, root: str = "/") -> uuid.UUID:
        """Read and parse the owner GUID file."""
        raw = read_file(_under(root, self.guid))
        try:
            return uuid.UUID(raw.decode("ascii"))
        except (ValueError, UnicodeDecodeError) as exc:
            raise ValueError(f"invalid GUID in {self.guid}: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "landlock": self.landlock,
            "keydir": self.keydir,
            "guid": self.guid,
            "files_db": self.files_db,
            "bundles_db": self.bundles_db,
        }
        if self.db_additions:
            data["db_additions"] = list(self.db_additions)
        if self.files:
            data["files"] = [f.to_dict() for f in self.files]
        data["keys"] = self.keys.to_dict() if self.keys is not None else None
        return data


def mk_config(directory: str) -> Config:
    """Return the configuration rooted at ``directory``."""
    keydir = posixpath.join(directory, "keys")

    def key(name: str) -> KeyConfig:
        return KeyConfig(
            privkey=posixpath.join(keydir, name, f"{name}.key"),
            pubkey=posixpath.join(keydir, name, f"{name}.pem"),
            type="file",
        )

    return Config(
        landlock=True,
        guid=posixpath.join(directory, "GUID"),
        keydir=keydir,
        files_db=posixpath.join(directory, "files.json"),
        bundles_db=posixpath.join(directory, "bundles.json"),
        keys=Keys(pk=key("PK"), kek=key("KEK"), db=key("db")),
    )


def default_config() -> Config:
    return mk_config(DEFAULT_DIRECTORY)


def old_config(directory: str) -> Config:
    """Return the configuration of the older layout, with ``.db`` databases."""
    conf = mk_config(directory)
    conf.files_db = conf.files_db.replace(".json", ".db", 1)
    conf.bundles_db = conf.bundles_db.replace(".json", ".db", 1)
    return conf


def has_old_config(directory: str) -> bool:
    return _exists(directory)


def has_configuration_file(file: str) -> bool:
    return _exists(file)


def _key_config(name: str, value: Any, current: KeyConfig | None) -> KeyConfig | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ConfigError(f"keys.{name}: expected a mapping")
    conf = current if current is not None else KeyConfig()
    for field_name in ("privkey", "pubkey", "type", "description"):
        if field_name in value:
            setattr(conf, field_name, _string(f"keys.{name}.{field_name}", value[field_name]))
    return conf


def _apply(conf: Config, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if key == "landlock":
            if not isinstance(value, bool):
                raise ConfigError(f"landlock: expected a boolean, got {value!r}")
            conf.landlock = value
        elif key in ("keydir", "guid", "files_db", "bundles_db"):
            setattr(conf, key, _string(key, value))
        elif key == "db_additions":
            items = value or []
            if not isinstance(items, list):
                raise ConfigError("db_additions: expected a list")
            conf.db_additions = [_string("db_additions", item) for item in items]
        elif key == "files":
            items = value or []
            if not isinstance(items, list):
                raise ConfigError("files: expected a list")
            files = []
            for item in items:
                if not isinstance(item, dict):
                    raise ConfigError("files: each entry must be a mapping")
                files.append(
                    FileConfig(
                        path=_string("files.path", item.get("path")),
                        output=_string("files.output", item.get("output")),
                    )
                )
            conf.files = files
        elif key == "keys":
            if value is None:
                conf.keys = None
                continue
            if not isinstance(value, dict):
                raise ConfigError("keys: expected a mapping")
            keys = conf.keys if conf.keys is not None else Keys()
            for name in ("pk", "kek", "db"):
                if name in value:
                    setattr(keys, name, _key_config(name, value[name], getattr(keys, name)))
            conf.keys = keys


def new_config(text: str | bytes) -> Config:
    """Parse a YAML configuration on top of the default configuration."""
    conf = default_config()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(str(exc)) from exc
    if data is None:
        return conf
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping")
    _apply(conf, data)
    return conf


@dataclass
class State:
    """The configuration together with the file system root it applies to."""

    config: Config = field(default_factory=default_config)
    root: str = "/"
    landlock_available: bool = False

    def resolve(self, path: str) -> str:
        """Map an absolute system path below this state's root."""
        return _under(self.root, path)

    def is_installed(self) -> bool:
        return _exists(self.resolve(self.config.keydir))

    def to_dict(self) -> dict[str, bool]:
        return {
            "installed": self.is_installed(),
            "landlock": self.config.landlock and self.landlock_available,
        }