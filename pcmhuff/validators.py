"""
validators.py

Shared codes for input validation in pcmhuff.
"""


import os
from typing import Any

from .errors import FileOpenError


def validate_type(variable: Any, name: str, expected_type: type) -> None:
    """Validate that variable is of the expected type."""
    if not isinstance(variable, expected_type):
        raise ValueError(f"{name} must be of type {expected_type.__name__}")


def validate_file_exists(file_path: str) -> None:
    """Validate that the given file path exists and is readable."""
    if not os.path.isfile(file_path):
        raise FileOpenError(file_path, "file does not exist")
    if not os.access(file_path, os.R_OK):
        raise FileOpenError(file_path, "file is not readable")


def validate_code(code: str, name: str = "Code") -> None:
    """Validate that code is a non-empty string of '0' and '1' characters."""
    validate_type(code, name, str)
    if len(code) == 0 or code.strip("01") != "":
        raise ValueError(f"{name} must be a non-empty string of '0' and '1'")
