[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pyishell"
version = "2.0.0"
description = "Library for building interactive command-line shells with commands, completion, prompts, menus and progress bars"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "repl", "cli", "interactive", "readline", "completion", "progress-bar"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pyishell-example = "pyishell.example:main"

[tool.hatch.build.targets.wheel]
packages = ["pyishell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
