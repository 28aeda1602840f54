[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledgerpallets"
version = "0.1.0"
description = "In-memory ledger modules: banking accounts with sub-account hierarchies and validator trust scoring"
requires-python = ">=3.10"
dependencies = []
keywords = ["ledger", "banking", "accounts", "validators", "trust-score", "blockchain"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ledgerpallets"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
