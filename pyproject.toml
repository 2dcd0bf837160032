[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "loanbank"
version = "0.1.0"
description = "A small console banking system for personal and home loans with EMI tracking"
requires-python = ">=3.10"
dependencies = []
keywords = ["loan", "emi", "bank", "finance", "console"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
loanbank = "loanbank.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["loanbank"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
