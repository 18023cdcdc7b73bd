[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snapshotkit"
version = "0.1.0"
description = "Building blocks for container snapshotters: snapshot models, wire messages, conversions and a request-handling wrapper."
requires-python = ">=3.10"
dependencies = [
    "protobuf",
]
keywords = [
    "containers",
    "snapshots",
    "snapshotter",
    "filesystem",
    "asyncio",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["snapshotkit"]

[tool.hatch.build.targets.sdist]
include = [
    "snapshotkit",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
