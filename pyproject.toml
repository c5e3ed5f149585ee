[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fivebar"
version = "0.1.0"
description = "Kinematics, dynamics and torque control for a planar five-bar linkage robot"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["five-bar", "robotics", "kinematics", "dynamics", "haptics", "control"]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fivebar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
