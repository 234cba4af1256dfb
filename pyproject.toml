[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridtown"
version = "0.1.0"
description = "A grid-based city simulation with roads, intersections, buildings and traffic"
requires-python = ">=3.10"
dependencies = []
keywords = ["city", "simulation", "traffic", "grid", "roads", "pathfinding"]
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
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gridtown = "gridtown.simulation:main"

[tool.hatch.build.targets.wheel]
packages = ["gridtown"]

[tool.pytest.ini_options]
addopts = "-ra"
