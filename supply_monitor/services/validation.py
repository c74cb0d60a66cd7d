from __future__ import annotations

import ipaddress
import logging
import re
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlsplit

from supply_monitor.models.config_record import REQUIRED_FIELDS, ConfigRecord

"""Record set validation.

Unlike discovery, validation is strict: the first violation aborts the run.
Checks per record, in index order: required fields, endpoint URL syntax, cell
address grammar.
"""

logger = logging.getLogger(__name__)

_CELL_ADDRESS = re.compile(r"[A-Z]+[1-9][0-9]*")
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_HOST_LABELS = re.compile(r"[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?(\.[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?)*\.?")


class RecordValidationError(Exception):
    """Base exception for record set validation failures."""


class InvalidRecordSetError(RecordValidationError):
    pass


class MissingFieldError(RecordValidationError):
    def __init__(self, index: int, field: str) -> None:
        self.index = index
        self.field = field
        super().__init__(f"Sheet configuration {index} is missing required field: {field}")


class InvalidEndpointError(RecordValidationError):
    def __init__(self, index: int, value: Any) -> None:
        self.index = index
        self.value = value
        super().__init__(f"Sheet configuration {index} has invalid webhook URL: {value}")


class InvalidCellAddressError(RecordValidationError):
    def __init__(self, index: int, field: str, value: Any) -> None:
        self.index = index
        self.field = field
        self.value = value
        super().__init__(f"Sheet configuration {index} has invalid {field}: {value}")


def is_valid_cell_address(value: Any) -> bool:
    """True for addresses like A1, C9, AA10 (uppercase column, row >= 1, no leading zero)."""
    return isinstance(value, str) and _CELL_ADDRESS.fullmatch(value) is not None


def is_valid_host(host: Any) -> bool:
    """IP literal or dot-separated LDH labels (IDN hosts are checked in punycode form)."""
    if not isinstance(host, str) or not host:
        return False
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    return _HOST_LABELS.fullmatch(ascii_host) is not None


def is_valid_url(value: Any) -> bool:
    """Syntactic check only: a scheme and a well-formed host must be present."""
    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        parts = urlsplit(value)
        # Accessing port validates it
        parts.port
    except ValueError:
        return False
    return bool(_SCHEME.fullmatch(parts.scheme)) and is_valid_host(parts.hostname)


def validate_records(records: Sequence[ConfigRecord] | Any) -> None:
    """Fail fast on the first invalid record.

    Raises:
        InvalidRecordSetError: records is not a non-empty list/tuple
        MissingFieldError: a required field is empty
        InvalidEndpointError: notification endpoint is not a valid URL
        InvalidCellAddressError: a cell address does not match the grammar
    """
    if not isinstance(records, (list, tuple)):
        raise InvalidRecordSetError("Configuration must be an array of sheet configurations")
    if len(records) == 0:
        raise InvalidRecordSetError("Configuration must contain at least one sheet configuration")

    for index, record in enumerate(records):
        for field in REQUIRED_FIELDS:
            if not getattr(record, field, None):
                raise MissingFieldError(index, field)

        if not is_valid_url(record.notification_endpoint):
            raise InvalidEndpointError(index, record.notification_endpoint)

        for field in ("current_value_cell", "daily_delta_cell"):
            value = getattr(record, field)
            if not is_valid_cell_address(value):
                raise InvalidCellAddressError(index, field, value)

    logger.info(f"Configuration validation passed for {len(records)} sheets")
