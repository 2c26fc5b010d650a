[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orderbook"
version = "0.1.0"
description = "A price-time priority order matching engine that replays a day's orders from a text file"
requires-python = ">=3.10"
dependencies = []
keywords = ["order book", "matching engine", "limit order", "market order", "trading"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
orderbook = "orderbook.engine:main"

[tool.hatch.build.targets.wheel]
packages = ["orderbook"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
