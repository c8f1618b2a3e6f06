[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "retrotiles"
version = "0.1.0"
description = "Data and scanline building blocks for a 2D retro tile engine: bitmaps, palettes, tilesets, TMX tilemaps, sequences, sprite atlases, blitters and actors"
requires-python = ">=3.10"
dependencies = ["pillow"]
keywords = ["tiles", "tilemap", "tmx", "tiled", "palette", "sprites", "atlas", "retro", "2d", "blitter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pillow"]

[tool.hatch.build.targets.wheel]
packages = ["retrotiles"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
