[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ptautil"
version = "0.1.0"
description = "Support utilities for pointer-analysis tooling: DOT output, index trees, memory watching, option parsing and result reports."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "pointer-analysis",
    "static-analysis",
    "call-graph",
    "graphviz",
    "dot",
    "statistics",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ptautil"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
