[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chatrender"
version = "0.1.0"
description = "Styled terminal text, message entities and layout for chat clients"
requires-python = ">=3.10"
keywords = ["chat", "terminal", "rendering", "text-wrapping", "styled-text"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Terminals",
]
dependencies = [
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chatrender"]

[tool.pytest.ini_options]
addopts = "-ra"
