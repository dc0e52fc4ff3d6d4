[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sqlqueryast"
version = "0.1.0"
description = "Immutable syntax-tree nodes for SQL query expressions, rendered back to SQL text"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "ast", "query", "syntax-tree", "select"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sqlqueryast"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
