[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "catdefense"
version = "0.1.0"
description = "A grid-based tower defense game in which cat towers guard their home against waves of enemies."
requires-python = ">=3.10"
keywords = ["game", "tower defense", "strategy", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Real Time Strategy",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
catdefense = "catdefense.app:main"

[tool.hatch.build.targets.wheel]
packages = ["catdefense"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
