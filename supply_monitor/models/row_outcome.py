from __future__ import annotations

from dataclasses import dataclass, field

from .config_record import ConfigRecord

"""Per-row discovery outcomes.

A scanned row either becomes a ConfigRecord or a RowSkip. Skips are
recoverable and never abort a run; fatal conditions are raised as exceptions
by the discovery service instead.
"""

__all__ = [
    "RowSkip",
    "DiscoveryResult",
    "SKIP_MISSING_FIELDS",
    "SKIP_INVALID_RESOURCE_URL",
]

SKIP_MISSING_FIELDS = "MISSING_FIELDS"
SKIP_INVALID_RESOURCE_URL = "INVALID_RESOURCE_URL"


@dataclass(frozen=True)
class RowSkip:
    """A row that was dropped during discovery."""
    row_number: int  # sheet row number (first data row = 3)
    error_type: str  # UPPER_SNAKE
    reason: str
    name: str | None = None


@dataclass(frozen=True)
class DiscoveryResult:
    """Records that survived discovery plus the rows that were skipped."""
    records: list[ConfigRecord]
    skipped: list[RowSkip] = field(default_factory=list)
    total_rows: int = 0
