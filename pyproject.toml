[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oxideux"
version = "0.1.0"
description = "Profile-driven terminal client and server for copying a directory's files over TCP"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["file-sharing", "tcp", "mirror", "download", "cli", "profiles"]
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
    "Topic :: Communications :: File Sharing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
oxideux-server = "oxideux.server:main"
oxideux-client = "oxideux.client:main"

[tool.hatch.build.targets.wheel]
packages = ["oxideux"]

[tool.pytest.ini_options]
addopts = "-ra"
