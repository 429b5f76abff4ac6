[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sftpkit"
version = "0.1.0"
description = "SFTP (SSH File Transfer Protocol) packet encoding, ls-style listings, globbing and response ordering"
requires-python = ">=3.10"
dependencies = []
keywords = ["sftp", "ssh", "filexfer", "protocol", "packets", "openssh", "glob"]
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
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sftpkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
