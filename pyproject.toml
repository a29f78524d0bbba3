[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webgee"
version = "0.1.0"
description = "A small WSGI web framework with trie-based dynamic routing and route groups"
requires-python = ">=3.10"
dependencies = []
keywords = ["wsgi", "web", "framework", "router", "trie"]
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
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
webgee = "webgee.app:main"

[tool.hatch.build.targets.wheel]
packages = ["webgee"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
