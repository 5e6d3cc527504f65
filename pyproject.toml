[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clinical_dashboard"
version = "0.1.0"
description = "Builds Plotly-ready timeline and visual attention plot data from clinical review sessions"
requires-python = ">=3.10"
dependencies = []
keywords = ["plotly", "timeline", "visual attention", "clinical review", "dashboard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["clinical_dashboard"]

[tool.pytest.ini_options]
addopts = "-ra"
