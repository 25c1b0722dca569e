[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pawnstorm"
version = "0.1.0"
description = "A small terminal chess game with a minimax alpha-beta engine"
requires-python = ">=3.10"
keywords = ["chess", "minimax", "alpha-beta", "game", "engine"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pawnstorm = "pawnstorm.game:main"

[tool.hatch.build.targets.wheel]
packages = ["pawnstorm"]

[tool.pytest.ini_options]
addopts = "-ra"
