[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gstalgen"
version = "0.1.0"
description = "Symbol table and GSTAL stack-machine code generation for a small teaching language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "code generation", "stack machine", "GSTAL", "symbol table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gstalgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
