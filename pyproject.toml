[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fe_analyzer"
version = "0.1.0"
description = "Semantic analysis building blocks for the Fe smart contract language: types, scopes, events, ABI names and analysis context."
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["fe", "compiler", "semantic-analysis", "ethereum", "abi", "types"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fe_analyzer"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
