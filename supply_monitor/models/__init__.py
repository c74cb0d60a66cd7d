"""Domain models for the supply monitor configuration pipeline."""

from .config_record import REQUIRED_FIELDS, ConfigRecord
from .error_record import ErrorRecord
from .layout import DEFAULT_LAYOUT, SheetLayout
from .row_outcome import (
    SKIP_INVALID_RESOURCE_URL,
    SKIP_MISSING_FIELDS,
    DiscoveryResult,
    RowSkip,
)

__all__ = [
    # Configuration records
    "ConfigRecord",
    "REQUIRED_FIELDS",
    "SheetLayout",
    "DEFAULT_LAYOUT",
    # Discovery outcomes
    "RowSkip",
    "DiscoveryResult",
    "SKIP_MISSING_FIELDS",
    "SKIP_INVALID_RESOURCE_URL",
    "ErrorRecord",
]
