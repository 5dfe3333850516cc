"""
Exceptions raised by the conversion pipelines.

Every failure is terminal for a conversion run: the first problem found
aborts the whole conversion and no output is written.
"""

from typing import List, Optional


class ConversionError(ValueError):
    """Base class for input problems that abort a conversion."""


class SchemaError(ConversionError):
    """Document is not JSON, or does not match its declared schema."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class VolumeShapeError(ConversionError):
    """Document is schema-valid but internally inconsistent."""
