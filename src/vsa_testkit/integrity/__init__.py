"""Integrity validation and reporting."""

from .report import IntegrityReport
from .validator import IntegrityValidator

__all__ = [
    "IntegrityReport",
    "IntegrityValidator",
]
