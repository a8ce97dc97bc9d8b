[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "citytour"
version = "0.1.0"
description = "Geodesic distances and travelling-salesman tour heuristics for cities given by latitude and longitude"
requires-python = ">=3.10"
dependencies = []
keywords = ["tsp", "travelling salesman", "geodesic", "vincenty", "heuristics", "routing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
citytour = "citytour.tsp:main"

[tool.hatch.build.targets.wheel]
packages = ["citytour"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
