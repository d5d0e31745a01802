[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "titlekit"
version = "0.1.0"
description = "Title metadata, ticket, CIA, SMDH, banner and save-chip helpers for managing handheld console titles"
requires-python = ">=3.10"
dependencies = []
keywords = ["cia", "tmd", "ticket", "smdh", "banner", "save-data", "spi", "title-manager"]
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
    "Topic :: System :: Software Distribution",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["titlekit"]

[tool.hatch.build.targets.sdist]
include = ["titlekit", "tests"]

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
