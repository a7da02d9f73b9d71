[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hvbase"
version = "1.20.3"
description = "Small building blocks for network services: error codes, CRC, logging, thread pool, sockets, packet headers and more"
requires-python = ">=3.10"
dependencies = []
keywords = ["crc", "logging", "threadpool", "sockets", "varint", "checksum", "utilities"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hvbase"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
