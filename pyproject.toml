[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "felsim"
version = "0.1.0"
description = "Free-electron laser input decks, profiles, sequences, quiet beam loading, Gauss-Hermite fields and wakefield potentials"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "free-electron laser",
    "FEL",
    "accelerator physics",
    "particle loading",
    "wakefield",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["felsim"]

[tool.pytest.ini_options]
addopts = "-ra"
