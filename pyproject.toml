[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dentalunit"
version = "0.1.0"
description = "Panel logic, button styles and four-byte serial protocol for a dental unit operator panel"
requires-python = ">=3.10"
keywords = ["dental", "serial", "uart", "control-panel", "chair", "voice-assistant"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Healthcare Industry",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dentalunit = "dentalunit.app:main"

[tool.hatch.build.targets.wheel]
packages = ["dentalunit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
