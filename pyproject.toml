[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blcrypt"
version = "0.1.0"
description = "BitLocker sector and key cryptography: AES-CBC with Elephant diffuser, AES-XTS, AES-CCM key unwrapping and CRC32"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["bitlocker", "aes", "xts", "ccm", "diffuser", "disk-encryption", "forensics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["blcrypt"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
