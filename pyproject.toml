[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alacod"
version = "0.0.1"
description = "Deterministic game-logic core for a top-down co-op zombie shooter: animation, collisions, movement, enemy AI, spawning and camera."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "shooter", "rollback", "collision", "pathfinding", "animation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["alacod"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
