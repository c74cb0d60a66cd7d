from __future__ import annotations

import logging
from typing import Protocol

from supply_monitor.config.loader import Settings
from supply_monitor.models.config_record import ConfigRecord
from supply_monitor.models.row_outcome import DiscoveryResult
from supply_monitor.sheets.reader import normalize_grid
from .discovery import scan_rows

"""Configuration loading pipeline.

fetch (the only await) -> normalize grid -> discover -> validate. Every fatal
failure surfaces as ConfigLoadingError with the cause chained.
"""

logger = logging.getLogger(__name__)


class ConfigLoadingError(Exception):
    """Uniform envelope for fatal configuration loading failures."""


class RangeFetcher(Protocol):
    async def get_range(self, sheet_id: str, range_spec: str, tab_name: str) -> list[list]:
        ...


async def load_discovery(settings: Settings, client: RangeFetcher) -> DiscoveryResult:
    """Fetch the Commander Database and return records plus skipped rows.

    Raises:
        ConfigLoadingError: wrapping any fetch, discovery or validation failure
    """
    layout = settings.layout
    try:
        logger.info(f"Loading configuration from database sheet: {settings.database_sheet_id}")
        rows = await client.get_range(
            settings.database_sheet_id, layout.range_spec, layout.tab_name
        )
        result = scan_rows(normalize_grid(rows, layout.width), layout)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise ConfigLoadingError(f"Configuration loading failed: {e}") from e

    logger.info(f"Successfully loaded configuration for {len(result.records)} commanders")
    return result


async def load_config(settings: Settings, client: RangeFetcher) -> list[ConfigRecord]:
    """Validated ConfigRecords in sheet row order."""
    result = await load_discovery(settings, client)
    return result.records
