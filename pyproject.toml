[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mineswept"
version = "1.0.0"
description = "A Minesweeper game whose grid grows each time you win"
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["minesweeper", "game", "puzzle", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mineswept = "mineswept.app:main"

[tool.hatch.build.targets.wheel]
packages = ["mineswept"]

[tool.pytest.ini_options]
addopts = "-ra"
