[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hyprline"
version = "0.1.0"
description = "Data and actions behind a Hyprland status bar: workspaces, events, keyboard layout, clock, resources, volume, battery, notifications and tray"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "hyprland",
    "wayland",
    "status-bar",
    "system-tray",
    "notifications",
    "desktop",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers :: Applets",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hyprline"]

[tool.hatch.build.targets.sdist]
include = ["hyprline", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
