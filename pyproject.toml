[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rlncsim"
version = "0.1.0"
description = "Random linear network coding with homomorphic commitments and a gossip network simulator for data availability experiments"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = [
    "network coding",
    "rlnc",
    "erasure coding",
    "reed-solomon",
    "pedersen commitment",
    "data availability",
    "gossip",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rlncsim-network = "rlncsim.benchmarks:main"
rlncsim-bench-pedersen = "rlncsim.benchmarks:main_pedersen"
rlncsim-bench-discrete-log = "rlncsim.benchmarks:main_discrete_log"
rlncsim-bench-commit = "rlncsim.benchmarks:main_commit_comparison"

[tool.hatch.build.targets.wheel]
packages = ["rlncsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
