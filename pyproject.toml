[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hoydtu"
version = "0.5.17"
description = "Protocol toolkit for Hoymiles micro-inverters: CRCs, request framing, payload layouts, configuration records and clock helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "hoymiles",
    "inverter",
    "dtu",
    "nrf24",
    "solar",
    "photovoltaic",
    "crc",
    "ntp",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Topic :: Home Automation",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hoydtu"]

[tool.hatch.build.targets.sdist]
include = [
    "hoydtu",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
