[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modern_history"
version = "0.1.0"
description = "A two-faction frontline war simulation on a territorial control grid"
requires-python = ">=3.10"
keywords = ["simulation", "strategy", "wargame", "frontline", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
modern-history = "modern_history.app:main"

[tool.hatch.build.targets.wheel]
packages = ["modern_history"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
