[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nesboards"
version = "0.1.0"
description = "NES cartridge board (mapper) logic: memory banking, bank switching, IRQ counters and expansion audio"
requires-python = ">=3.10"
dependencies = []
keywords = ["nes", "emulator", "mapper", "mmc1", "mmc2", "mmc3", "vrc6", "bank switching"]
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nesboards"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
