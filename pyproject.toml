[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tasktrack"
version = "0.1.0"
description = "A small command-line task tracker that keeps tasks in a JSON file"
requires-python = ">=3.10"
dependencies = []
keywords = ["tasks", "todo", "cli", "tracker", "json"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
task-cli = "tasktrack.manager:main"

[tool.hatch.build.targets.wheel]
packages = ["tasktrack"]

[tool.pytest.ini_options]
addopts = "-ra"
