[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "loessdecomp"
version = "0.1.4"
description = "Seasonal-trend decomposition using Loess (STL) and multiple seasonal decomposition (MSTL) in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["stl", "mstl", "loess", "time series", "decomposition", "seasonality", "trend"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["loessdecomp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
