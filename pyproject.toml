[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zora"
version = "0.8.3"
description = "Resource models, scan status aggregation and SaaS payloads for Kubernetes cluster scanning"
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "security", "misconfiguration", "vulnerability", "scanning"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zora"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
