"""
errors.py

Error types raised by pcmhuff. All of them are ValueError subclasses, so
callers catching the validators' ValueError also see codec failures.
"""


class CodecError(ValueError):
    """Base class for encode/decode failures."""


class FileOpenError(CodecError):
    """An input or output path cannot be used."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open file {path}: {reason}")


class StructuralError(CodecError):
    """The byte layout does not match the expected container structure."""


class TruncatedStreamError(StructuralError):
    """Fewer bytes or bits are available than a declared field requires."""

    def __init__(self, field: str, expected: int, available: int) -> None:
        self.field = field
        self.expected = expected
        self.available = available
        super().__init__(f"Stream truncated while reading {field}: expected {expected}, got {available}")


class InvalidCodeTableError(CodecError):
    """A stored code table cannot describe a prefix code."""
