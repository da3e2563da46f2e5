[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmkit"
version = "0.1.0"
description = "Signal filters, trajectory generators, LQR, orientation helpers and a super-capacitor frame decoder for competition robots"
requires-python = ">=3.10"
keywords = [
    "robotics",
    "filters",
    "kalman",
    "lqr",
    "trajectory",
    "quaternion",
    "interpolation",
    "super-capacitor",
]
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
    "Topic :: Scientific/Engineering",
    "Typing :: Typed",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rmkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
