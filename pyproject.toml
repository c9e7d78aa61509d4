[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spotlink"
version = "0.1.0"
description = "Spotify Connect building blocks: metadata models, zeroconf discovery and audio sinks"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "spotify",
    "spotify-connect",
    "zeroconf",
    "mdns",
    "audio",
    "metadata",
    "playlist",
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
    "Topic :: Multimedia :: Sound/Audio :: Players",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spotlink"]

[tool.hatch.build.targets.sdist]
include = [
    "spotlink",
    "tests",
    "pyproject.toml",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
