[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "confprobe"
version = "0.1.0"
description = "Instrument source code to record which configuration options are exercised, and generate configuration test samples"
requires-python = ">=3.10"
dependencies = [
    "lxml",
]
keywords = ["configuration", "instrumentation", "srcml", "sampling", "performance testing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
confprobe-instrument = "confprobe.pipeline:main"

[tool.hatch.build.targets.wheel]
packages = ["confprobe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
