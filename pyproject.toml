[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eedatabase"
version = "0.1.0"
description = "A fixed-layout device database stored in a simulated paged EEPROM"
requires-python = ">=3.10"
dependencies = []
keywords = ["eeprom", "embedded", "database", "bootloader", "firmware"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
eedatabase-demo = "eedatabase.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["eedatabase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
