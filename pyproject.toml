[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fearledger"
version = "0.1.0"
description = "Hash-chained moral ledger, biophysical safety envelopes, eco-fairness guards and small orchestration models."
requires-python = ">=3.10"
keywords = [
    "ledger",
    "hash-chain",
    "governance",
    "ecology",
    "fairness",
    "jsonl",
    "json-rpc",
    "scheduler",
]
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
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["fearledger"]

[tool.hatch.build.targets.sdist]
include = ["fearledger", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
