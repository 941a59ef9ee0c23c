[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atmbank"
version = "0.1.0"
description = "A small bank ledger with CSV storage, a teller console and a serial-line ATM server"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = ["bank", "atm", "ledger", "teller", "serial", "rfid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
atmbank-server = "atmbank.protocol:main"

[tool.hatch.build.targets.wheel]
packages = ["atmbank"]

[tool.pytest.ini_options]
addopts = "-ra"
