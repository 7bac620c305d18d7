[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crdtcounter"
version = "0.1.0"
description = "Grow-only and positive-negative CRDT counters, with small UDP replication nodes"
requires-python = ">=3.10"
dependencies = []
keywords = ["crdt", "g-counter", "pn-counter", "eventual consistency", "udp", "replication"]
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
    "Topic :: System :: Distributed Computing",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
crdt-gcounter-demo = "crdtcounter.gcounter:main"
crdt-pncounter-demo = "crdtcounter.pncounter:main"
crdt-udp-state = "crdtcounter.udp_state:main"
crdt-udp-op = "crdtcounter.udp_op:main"

[tool.hatch.build.targets.wheel]
packages = ["crdtcounter"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
