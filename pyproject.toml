[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ossched"
version = "0.1.0"
description = "A tick-based CPU scheduling simulator with client applications talking over a UNIX socket"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "scheduler",
    "scheduling",
    "simulation",
    "operating-systems",
    "fifo",
    "sjf",
    "round-robin",
    "mlfq",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ossched-sim = "ossched.ossim:main"
ossched-app = "ossched.app:main"
ossched-app-io = "ossched.app_io:main"

[tool.hatch.build.targets.wheel]
packages = ["ossched"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
