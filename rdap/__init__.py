"""RDAP response decoding, request URL building, jCard reading and text output."""

__version__ = "0.1.0"