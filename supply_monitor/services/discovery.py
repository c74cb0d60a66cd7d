from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from supply_monitor.models.config_record import ConfigRecord
from supply_monitor.models.layout import DEFAULT_LAYOUT, SheetLayout
from supply_monitor.models.row_outcome import (
    SKIP_INVALID_RESOURCE_URL,
    SKIP_MISSING_FIELDS,
    DiscoveryResult,
    RowSkip,
)
from .validation import validate_records

"""Commander discovery over Commander Database rows.

Each row evaluates to a ConfigRecord or a RowSkip. Skipped rows (missing
fields, unparseable sheet URL) are logged and dropped; they never abort the
run. EmptySourceError and NoValidRecordsError are the only fatal outcomes of
the scan itself, after which the survivors go through validate_records.
"""

logger = logging.getLogger(__name__)

# https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit#gid=0
_SHEET_ID = re.compile(r"/spreadsheets/d/([A-Za-z0-9_-]+)")


class DiscoveryError(Exception):
    """Base exception for fatal discovery failures."""


class EmptySourceError(DiscoveryError):
    pass


class NoValidRecordsError(DiscoveryError):
    pass


class InvalidResourceUrlError(ValueError):
    def __init__(self, url: Any) -> None:
        self.url = url
        super().__init__(f"Invalid Google Sheets URL: {url}")


def extract_identifier(url: Any) -> str:
    """Return the spreadsheet id embedded in a Google Sheets URL.

    Raises:
        InvalidResourceUrlError: no /spreadsheets/d/<id> segment present
    """
    match = _SHEET_ID.search(url) if isinstance(url, str) else None
    if match is None or not match.group(1):
        raise InvalidResourceUrlError(url)
    return match.group(1)


def _cell(row: Sequence[Any], index: int) -> str | None:
    """Trimmed string at index, or None when absent/blank."""
    if index >= len(row):
        return None
    value = row[index]
    if value is None:
        return None
    if not isinstance(value, str):
        # NaN from a DataFrame is the only non-string "empty" value
        if value != value:
            return None
        value = str(value)
    value = value.strip()
    return value or None


def evaluate_row(
    row: Sequence[Any] | None, row_number: int, layout: SheetLayout = DEFAULT_LAYOUT
) -> ConfigRecord | RowSkip:
    row = row or []
    name = _cell(row, layout.name_column)
    sheet_url = _cell(row, layout.url_column)
    webhook_url = _cell(row, layout.endpoint_column)

    if not name or not sheet_url or not webhook_url:
        return RowSkip(
            row_number=row_number,
            error_type=SKIP_MISSING_FIELDS,
            reason=(
                f"missing required fields (name: {bool(name)}, "
                f"sheetUrl: {bool(sheet_url)}, webhookUrl: {bool(webhook_url)})"
            ),
            name=name,
        )

    try:
        sheet_id = extract_identifier(sheet_url)
    except InvalidResourceUrlError as e:
        return RowSkip(
            row_number=row_number,
            error_type=SKIP_INVALID_RESOURCE_URL,
            reason=str(e),
            name=name,
        )

    return ConfigRecord(
        name=name,
        resource_id=sheet_id,
        resource_location=layout.resource_location,
        notification_endpoint=webhook_url,
        current_value_cell=layout.current_value_cell,
        daily_delta_cell=layout.daily_delta_cell,
    )


def scan_rows(
    rows: Sequence[Sequence[Any] | None] | None, layout: SheetLayout = DEFAULT_LAYOUT
) -> DiscoveryResult:
    """Scan rows in order, keeping records and skips in source order.

    Raises:
        EmptySourceError: rows is None or empty
        NoValidRecordsError: rows were present but none produced a record
    """
    if not rows:
        raise EmptySourceError("No commander data found in Commander Database sheet")

    records: list[ConfigRecord] = []
    skipped: list[RowSkip] = []
    for i, row in enumerate(rows):
        row_number = i + layout.first_row
        outcome = evaluate_row(row, row_number, layout)
        if isinstance(outcome, RowSkip):
            skipped.append(outcome)
            if outcome.error_type == SKIP_MISSING_FIELDS:
                logger.debug(f"Skipping row {row_number}: {outcome.reason}")
            else:
                logger.warning(f"Skipping row {row_number} ({outcome.name}): {outcome.reason}")
            continue
        records.append(outcome)
        logger.debug(f"Added configuration for: {outcome.name}")

    if not records:
        raise NoValidRecordsError(
            "No valid commander configurations found in Commander Database sheet"
        )

    validate_records(records)
    return DiscoveryResult(records=records, skipped=skipped, total_rows=len(rows))


def discover_records(
    rows: Sequence[Sequence[Any] | None] | None, layout: SheetLayout = DEFAULT_LAYOUT
) -> list[ConfigRecord]:
    """Build validated ConfigRecords from Commander Database rows."""
    return scan_rows(rows, layout).records
