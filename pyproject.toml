[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "respclient"
version = "0.1.0"
description = "Building blocks for a RESP protocol client: command formatting, reply objects, a chained hash table and pub/sub bookkeeping."
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "resp", "protocol", "client", "pubsub"]
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
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["respclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
