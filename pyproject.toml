[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lrformat"
version = "0.1.0"
description = "Convert Line Rider tracks between the TrackJSON and LRB file formats"
requires-python = ">=3.10"
dependencies = []
keywords = ["line rider", "track", "lrb", "json", "converter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lrformat = "lrformat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lrformat"]

[tool.pytest.ini_options]
addopts = "-ra"
