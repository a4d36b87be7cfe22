[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imageconverter"
version = "0.1.0"
description = "A small HTTP service that converts, crops, pads, inverts and filters images"
requires-python = ">=3.10"
keywords = ["image", "conversion", "jpeg", "png", "webp", "http", "api", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]
dependencies = [
    "pillow>=10.0",
    "flask>=2.3",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
imageconverter = "imageconverter.api:main"

[tool.hatch.build.targets.wheel]
packages = ["imageconverter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
