[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ovenctl"
version = "0.1.0"
description = "Building blocks for a staged heating oven controller: ring buffer, parsers, emulated flash, command line, buttons, indicators, SSD1306 display driver and heater/fan outputs"
requires-python = ">=3.10"
dependencies = []
keywords = ["oven", "controller", "embedded", "ssd1306", "ring-buffer", "cli", "debounce", "heater"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ovenctl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
