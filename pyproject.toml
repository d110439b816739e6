[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rushhour"
version = "0.1.0"
description = "The Rush Hour sliding-block puzzle on a small scene-graph engine with an OVO scene loader"
requires-python = ">=3.10"
keywords = ["rush hour", "puzzle", "game", "scene graph", "ovo"]
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
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rushhour = "rushhour.app:main"

[tool.hatch.build.targets.wheel]
packages = ["rushhour"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
