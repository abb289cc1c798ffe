[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textlines"
version = "0.1.0"
description = "Text line segmentation helpers: search areas around baselines, line contours from frontier polylines, and line image extraction from page images."
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = ["text lines", "baselines", "document analysis", "segmentation", "polylines"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["textlines"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
