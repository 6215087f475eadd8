[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diagramchess"
version = "0.1.4"
description = "Chess position model, opening book, UCI engine client and board geometry for a diagram-style chess board"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "uci", "eco", "openings", "board", "fen", "san"]
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["diagramchess"]

[tool.hatch.build.targets.sdist]
include = ["diagramchess", "tests"]

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
