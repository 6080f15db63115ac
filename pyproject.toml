[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bmpkit"
version = "0.1.0"
description = "Load, edit and save 8-bit and 24-bit BMP images: negative, brightness, threshold and convolution filters"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmp", "bitmap", "image", "grayscale", "convolution", "filter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bmpkit = "bmpkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bmpkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
