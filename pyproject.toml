[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seamcarve"
version = "0.1.0"
description = "Content-aware image resizing by seam carving: dynamic programming and block-parallel greedy seams"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = [
    "seam carving",
    "image retargeting",
    "content-aware resize",
    "energy map",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
seamcarve-sequential = "seamcarve.sequential:main"
seamcarve-parallel = "seamcarve.parallel:main"
seamcarve-png2txt = "seamcarve.textimage:png_to_text_main"
seamcarve-txt2png = "seamcarve.textimage:text_to_png_main"

[tool.hatch.build.targets.wheel]
packages = ["seamcarve"]

[tool.hatch.build.targets.sdist]
include = [
    "seamcarve",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
