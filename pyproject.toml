[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "threshkit"
version = "0.1.0"
description = "Building blocks for threshold ECDSA: typed index collections, secp256k1 arithmetic, Paillier encryption and zero-knowledge proofs"
requires-python = ">=3.10"
keywords = ["threshold", "ecdsa", "secp256k1", "paillier", "zero-knowledge", "mpc"]
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
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["threshkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
