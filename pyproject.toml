[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "totoro-long"
version = "0.1.0"
description = "A small top-down tile game: collect every acorn, then reach the door."
requires-python = ">=3.10"
keywords = ["game", "puzzle", "tile", "xpm", "pygame", "ber"]
classifiers = [
    "Development Status :: 4 - Beta",
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
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
totoro-long = "totoro_long.app:main"

[tool.hatch.build.targets.wheel]
packages = ["totoro_long"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
