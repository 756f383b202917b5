[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paxnet"
version = "0.1.0"
description = "Traced TCP/UDP clients and servers, fixed-capacity containers and a minimal HTTP/1.1 message codec"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "udp", "sockets", "http", "networking", "ring-buffer", "deque"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Internet :: WWW/HTTP",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["paxnet"]

[tool.pytest.ini_options]
addopts = "-ra"
