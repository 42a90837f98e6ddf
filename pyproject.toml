[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tracewrite"
version = "0.40.0"
description = "Writers that turn traced spline outlines into vector file formats: CGM, DR2D, EPD, EPS, Elastic Reality and XFig."
requires-python = ">=3.10"
dependencies = []
keywords = ["vector", "splines", "bezier", "tracing", "cgm", "eps", "epd", "fig", "dr2d", "b-spline"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tracewrite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
