[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deepola"
version = "0.1.0"
description = "Online forecasting of streaming time series and incremental DataFrame operations"
requires-python = ">=3.10"
keywords = ["forecasting", "time series", "online aggregation", "dataframe", "streaming"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Information Analysis",
]
dependencies = [
    "pandas",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["deepola"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
