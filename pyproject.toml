[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "artree"
version = "0.1.0"
description = "Adaptive radix tree building blocks: tagged pointers, key generators, and tree visitors for statistics, DOT output and well-formedness checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["radix tree", "adaptive radix tree", "trie", "graphviz", "dot", "tagged pointer"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["artree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
