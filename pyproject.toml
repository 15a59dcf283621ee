[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "e57nodes"
version = "0.1.0"
description = "Element tree, XML serialisation and value-transfer buffers for ASTM E57 3D imaging data"
requires-python = ">=3.10"
dependencies = []
keywords = ["e57", "point cloud", "lidar", "3d imaging", "astm"]
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
    "Topic :: File Formats",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["e57nodes"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
