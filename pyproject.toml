[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ndnfwd"
version = "0.0.1"
description = "Named Data Networking forwarder building blocks: TLV encoding, names, face URIs and forwarding tables"
requires-python = ">=3.10"
dependencies = []
keywords = ["ndn", "named-data-networking", "tlv", "forwarder", "fib", "rib", "face-uri"]
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
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ndnfwd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
