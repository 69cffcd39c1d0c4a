"""Domain layer: errors and schemas."""

from .errors import BootstrapError, ErrorCodes
from .schemas import (
    DelimiterPair,
    EntryOutcome,
    EntryStatus,
    InstallOptions,
    InstallReport,
)

__all__ = [
    "BootstrapError",
    "ErrorCodes",
    "DelimiterPair",
    "EntryOutcome",
    "EntryStatus",
    "InstallOptions",
    "InstallReport",
]
