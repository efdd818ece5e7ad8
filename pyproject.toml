[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "approx2d"
version = "0.1.0"
description = "Piecewise-linear approximation of functions of two variables on a triangulated grid"
requires-python = ">=3.10"
keywords = ["approximation", "finite elements", "msr", "sparse matrix", "iterative solver", "visualization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
approx2d = "approx2d.cli:main"
approx2d-gui = "approx2d.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["approx2d"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
