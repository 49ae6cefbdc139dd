[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "editos"
version = "0.1.0"
description = "Building blocks of a small hobby kernel: framebuffer graphics, text rendering, keyboard input, a terminal, a shell, heaps and Multiboot2 parsing"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kernel",
    "operating-system",
    "framebuffer",
    "multiboot2",
    "gap-buffer",
    "shell",
    "tty",
    "heap",
    "ps2",
]
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
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["editos"]

[tool.hatch.build.targets.sdist]
include = ["editos", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
