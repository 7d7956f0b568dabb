# sbctl

Helpers for keeping track of a Secure Boot setup on Linux: the JSON
database of files to sign, the owner GUID, the YAML configuration,
locating the EFI system partition, reading the DMI table, detecting known
firmware quirks, and reporting the Secure Boot state read from efivarfs.

## Installation

```
pip install .
```

For running the tests:

```
pip install '.[test]'
pytest
```

## Command line

The global options `--json`, `--config PATH` and `--root PATH` come
before the command.

Show the current boot status:

```
sbctl status
sbctl --json status
```

`status` fails with "system is not booted with UEFI" when the `SetupMode`
variable is missing under `<root>/sys/firmware/efi/efivars`. Otherwise it
reports:

- whether sbctl is installed (the configured key directory exists) and,
  if so, the owner GUID read from the configured GUID file;
- whether Setup Mode and Secure Boot are enabled, read from the
  `SetupMode` and `SecureBoot` efivarfs files;
- vendor keys (always reported as `none`, see below);
- firmware quirks detected from the DMI table under
  `<root>/sys/devices/virtual/dmi/id/`.

`--config` loads a YAML configuration instead of the defaults; `--root`
inspects a file system mounted somewhere other than `/`.

Set `SBCTL_UNICODE=0` to use the plain markers `[+]`, `[-]`, `[!]` and
`[?]` instead of symbols. Colour is used only when standard output is a
terminal and neither `NO_COLOR` is set nor `TERM=dumb`.

Print the version:

```
sbctl version
```

## Library use

```python
from sbctl.config import mk_config, new_config
from sbctl.database import SigningEntry, read_file_database, write_file_database
from sbctl.dmi import parse_dmi
from sbctl.esp import find_esp, get_esp
from sbctl.quirks import check_firmware_quirks

config = mk_config("/tmp/sbctl-demo")
entries = read_file_database(config.files_db)   # created empty if missing
entries["/boot/vmlinuz-linux"] = SigningEntry(
    file="/boot/vmlinuz-linux", output_file="/boot/vmlinuz-linux"
)
write_file_database(config.files_db, entries)

for quirk in check_firmware_quirks(parse_dmi("/")):
    print(quirk.id, quirk.name, quirk.severity, quirk.method)
```

Modules:

- `sbctl.config` – `Config`, `Keys`, `KeyConfig`, `FileConfig`, `State`;
  `mk_config`, `default_config` (rooted at `/var/lib/sbctl`), `old_config`
  (`files.db`/`bundles.db` names), `new_config(text)` which overlays YAML
  keys `landlock`, `keydir`, `guid`, `files_db`, `bundles_db`,
  `db_additions`, `files` and `keys` on the defaults and raises
  `ConfigError` on bad input.
- `sbctl.database` – `SigningEntry`, `read_file_database`,
  `write_file_database`, `iter_signing_entries`; errors raise
  `DatabaseError`.
- `sbctl.guid` – `create_uuid`, and `create_guid(path)` which reads the
  GUID file or writes a new random one.
- `sbctl.esp` – `find_esp(data)` takes the output of
  `lsblk --json --tree --output PARTTYPE,MOUNTPOINT,PTTYPE,FSTYPE` and
  returns the ESP mount point (`/efi`, `/boot` or `/boot/efi`) or raises
  `EspNotFoundError`; `get_esp` first honours `SYSTEMD_ESP_PATH` and
  `ESP_PATH`, then runs `lsblk`; `combine_files` concatenates a microcode
  image and an initramfs into a new temporary file and returns its path.
- `sbctl.dmi` – `DMI` and `parse_dmi(root)`.
- `sbctl.quirks` – `Quirk`, `detect_fq0001`, `check_firmware_quirks`.
  A quirk's `link` is its ID appended to `SBCTL_QUIRK_LINK_BASE` when that
  variable is set, and just the ID otherwise.
- `sbctl.status` – `Status`, `read_efivar_bool`, `collect_status`,
  `print_status`.
- `sbctl.output` – the `okf`/`not_okf`/`warnf`/`unknownf`/`fatalf`/`errorf`
  formatters and `Printer`.
- `sbctl.hierarchy` – the `Hierarchy` enum (`PK`, `KEK`, `db`, `dbx`).
- `sbctl.stringset` – `StringSet`, a value restricted to allowed strings.
- `sbctl.fsutil` – file helpers, including `check_msdos`,
  `copy_directory` and `CheckedPaths`.

## What this package does not do

It does not create, import or rotate keys, enroll keys into the firmware,
sign or verify EFI binaries, build unified kernel images, or apply
Landlock restrictions. The `status` command does not detect enrolled
vendor certificates, so vendor keys always show as `none`. The only
commands are `status` and `version`.