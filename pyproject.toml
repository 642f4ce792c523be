[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unoserver"
version = "0.1.0"
description = "A small WebSocket server for multiplayer games of Uno"
requires-python = ">=3.10"
keywords = ["uno", "card game", "websocket", "multiplayer", "server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
unoserver = "unoserver.main:main"

[tool.hatch.build.targets.wheel]
packages = ["unoserver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
