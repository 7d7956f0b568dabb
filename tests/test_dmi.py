from datetime import date

from sbctl.dmi import DMI, parse_dmi


def _write_dmi(root, values):
    directory = root / "sys" / "devices" / "virtual" / "dmi" / "id"
    directory.mkdir(parents=True)
    for name, value in values.items():
        (directory / name).write_text(value)


def test_parse_dmi_source_case(tmp_path):
    _write_dmi(
        tmp_path,
        {
            "bios_date": "01/13/2023\n",
            "bios_release": "HorribleFirmwareRelease\n",
            "bios_vendor": "EmbarrassedFirmwareVendor\n",
            "bios_version": "InsecureFirmwareVersion\n",
            "board_name": "BadBoardName\n",
            "board_vendor": "IncompetentBoardVendor\n",
            "board_version": "WeirdBoardVersion\n",
            "chassis_type": "3\n",
            "product_family": "MediocreProductFamily\n",
            "product_name": "AwfulProductName\n",
            "product_sku": "RandomProductSKU\n",
            "product_version": "CrazyProductVersion\n",
            "sys_vendor": "EvilSystemVendor\n",
        },
    )
    table = parse_dmi(str(tmp_path))
    assert table.board_name == "BadBoardName"
    assert table.board_vendor == "IncompetentBoardVendor"
    assert table.board_version == "WeirdBoardVersion"
    assert table.chassis_type == "3"
    assert table.firmware_date == date(2023, 1, 13)
    assert table.firmware_release == "HorribleFirmwareRelease"
    assert table.firmware_vendor == "EmbarrassedFirmwareVendor"
    assert table.firmware_version == "InsecureFirmwareVersion"
    assert table.product_family == "MediocreProductFamily"
    assert table.product_name == "AwfulProductName"
    assert table.product_sku == "RandomProductSKU"
    assert table.product_version == "CrazyProductVersion"
    assert table.system_vendor == "EvilSystemVendor"


def test_missing_directory_gives_empty_table(tmp_path):
    assert parse_dmi(str(tmp_path)) == DMI()


def test_invalid_date_is_none(tmp_path):
    _write_dmi(tmp_path, {"bios_date": "2023-01-13\n", "board_name": "X\n"})
    table = parse_dmi(str(tmp_path))
    assert table.firmware_date is None
    assert table.board_name == "X"


def test_to_dict_date_format():
    table = DMI(board_name="BadBoardName", firmware_date=date(2023, 1, 13))
    data = table.to_dict()
    assert data["firmware_date"] == "2023-01-13T00:00:00Z"
    assert data["board_name"] == "BadBoardName"
    assert DMI().to_dict()["firmware_date"] == "0001-01-01T00:00:00Z"