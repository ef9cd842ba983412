[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quatview"
version = "0.1.0"
description = "Quaternion, Euler angle and matrix conversions across configurable coordinate systems"
requires-python = ">=3.10"
dependencies = []
keywords = ["quaternion", "rotation", "euler", "matrix", "coordinate-system", "transform"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["quatview"]

[tool.pytest.ini_options]
addopts = "-ra"
