[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pipekit"
version = "0.1.0"
description = "Small TCP tools: a bidirectional socket-to-stdio copier, a minimal HTTP fetcher and a netcat-style client/server."
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "socket", "http", "netcat", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Internet :: WWW/HTTP",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pipekit-webget = "pipekit.webget:main"
pipekit-tcp = "pipekit.tcp_native:main"

[tool.hatch.build.targets.wheel]
packages = ["pipekit"]

[tool.pytest.ini_options]
addopts = "-ra"
