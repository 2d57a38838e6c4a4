[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sparrowwire"
version = "0.1.0"
description = "MySQL wire-protocol packets, storage key layout and scan planning for a small SQL server"
requires-python = ">=3.10"
dependencies = []
keywords = ["mysql", "protocol", "wire", "database", "key-value", "storage"]
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
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sparrowwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
