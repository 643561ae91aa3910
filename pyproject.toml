[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "platformer"
version = "0.1.0"
description = "Tile, level and entity logic for a 2D side-scrolling platformer"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "platformer", "tiles", "level", "entities"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["platformer"]

[tool.pytest.ini_options]
addopts = "-ra"
