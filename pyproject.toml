[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sheetcells"
version = "0.1.0"
description = "Spreadsheet cell model, column ranges, data validation, Excel date conversion and a disk-backed cell store"
requires-python = ">=3.10"
dependencies = []
keywords = ["spreadsheet", "xlsx", "excel", "cells", "dates", "data-validation"]
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
    "Topic :: Office/Business :: Financial :: Spreadsheet",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sheetcells"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
