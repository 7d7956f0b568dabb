[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sbctl"
version = "0.1.0"
description = "Secure Boot helpers: signing-file database, owner GUID, ESP discovery, firmware quirk detection and status reporting"
requires-python = ">=3.10"
keywords = ["secure boot", "uefi", "esp", "efivarfs", "dmi", "firmware"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Boot",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sbctl = "sbctl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sbctl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
