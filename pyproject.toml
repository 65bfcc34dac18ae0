[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hlskit"
version = "0.2.0"
description = "Convert videos into multi-resolution HLS streams using ffmpeg."
requires-python = ">=3.10"
dependencies = []
keywords = ["hls", "ffmpeg", "m3u8", "multimedia", "streaming", "video-processing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Multimedia :: Video :: Conversion",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
hlskit = "hlskit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["hlskit"]

[tool.pytest.ini_options]
addopts = "-ra"
