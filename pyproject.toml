[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "threebody"
version = "1.0.0"
description = "Interactive gravitational three-body simulation with RK4, Euler and velocity Verlet integrators"
requires-python = ">=3.10"
keywords = ["n-body", "three-body", "gravity", "simulation", "runge-kutta", "verlet", "orbital mechanics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
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
dependencies = [
    "numpy>=1.22",
    "pygame>=2.1",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
threebody = "threebody.app:main"

[tool.hatch.build.targets.wheel]
packages = ["threebody"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
