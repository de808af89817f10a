[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "credvault"
version = "0.20.0"
description = "In-memory model of verifiable credential issuance and per-owner credential vaults with issuer authorization, revocation and fees."
requires-python = ">=3.10"
dependencies = []
keywords = ["verifiable-credentials", "did", "vault", "issuance", "revocation"]
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
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["credvault"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
