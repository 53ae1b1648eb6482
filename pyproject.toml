[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spellhaven"
version = "0.1.0"
description = "Building blocks for procedural voxel worlds: level-of-detail chunks, quad trees, noise modifiers, caches and road finding between cities."
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "procedural-generation", "noise", "terrain", "quadtree", "pathfinding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spellhaven"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
