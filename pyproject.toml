[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "firesim"
version = "0.1.0"
description = "Stochastic forest-fire propagation model on a square grid, with wind, a band-partitioned variant and a live display"
requires-python = ">=3.10"
keywords = ["simulation", "forest fire", "cellular automaton", "wind", "domain decomposition"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
firesim = "firesim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["firesim"]

[tool.pytest.ini_options]
addopts = "-ra"
