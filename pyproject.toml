[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rdap"
version = "0.1.0"
description = "Registration Data Access Protocol (RDAP) response decoding, request URL building, jCard reading and WHOIS-style printing"
requires-python = ">=3.10"
dependencies = []
keywords = ["rdap", "whois", "registration data", "domain", "ip", "autnum", "jcard", "vcard"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rdap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
