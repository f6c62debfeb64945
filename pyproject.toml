[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geodemos"
version = "0.1.0"
description = "Geometry and physics algorithms: progressive mesh reduction and level of detail, quaternion poses, paraboloid fitting, cloth simulation and a small JSON value model."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "progressive mesh",
    "level of detail",
    "polygon reduction",
    "quaternion",
    "pose",
    "paraboloid fit",
    "cloth simulation",
    "json",
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["geodemos"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
