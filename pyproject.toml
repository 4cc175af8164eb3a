[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "silverbrain"
version = "0.1.0"
description = "Silver Brain - your external brain: a personal knowledge store served over HTTP."
requires-python = ">=3.10"
keywords = ["notes", "knowledge-base", "sqlite", "http", "search"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: News/Diary",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
silver-brain = "silverbrain.cli:main"
silver-brain-server = "silverbrain.cli:server_main"

[tool.hatch.build.targets.wheel]
packages = ["silverbrain"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
