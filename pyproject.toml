[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "windsim"
version = "0.1.0"
description = "Stochastic wind velocity time histories by the Wittig & Sinha discrete frequency method"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["wind", "stochastic", "time history", "cross-spectral density", "simulation", "structural engineering"]
classifiers = [
    "Development Status :: 4 - Beta",
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
packages = ["windsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
