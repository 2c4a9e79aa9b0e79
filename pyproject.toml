[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vicblue"
version = "0.1.0"
description = "Decrypt and decode Bluetooth advertisement data from solar charge controllers and battery monitors"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["bluetooth", "ble", "battery-monitor", "solar", "aes-ctr", "advertisement"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
vicblue = "vicblue.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["vicblue"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
