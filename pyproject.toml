[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dokit"
version = "0.1.0"
description = "Everyday helpers: collections, joins, pipelines, dependency injection, expiring maps, tokens, HTTP and SQL utilities."
requires-python = ">=3.10"
keywords = ["utilities", "helpers", "pipeline", "dependency-injection", "jwt", "sql", "http"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyjwt",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["dokit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
