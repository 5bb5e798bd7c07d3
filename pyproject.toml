[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bonobo"
version = "0.1.0"
description = "Core helpers for small real-time 3D applications: TRS transforms, an FPS camera, input state tracking, logging and GL debug message formatting."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["graphics", "3d", "camera", "transform", "input", "logging", "opengl"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["bonobo"]

[tool.pytest.ini_options]
addopts = "-ra"
