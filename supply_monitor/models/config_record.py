from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""ConfigRecord model.

One ConfigRecord is built per usable row of the Commander Database sheet and
handed to the notification side as-is. Records are immutable and only live for
a single run.
"""

__all__ = [
    "ConfigRecord",
    "REQUIRED_FIELDS",
]

# Checked by the validator in this order
REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "resource_id",
    "notification_endpoint",
    "current_value_cell",
    "daily_delta_cell",
)


@dataclass(frozen=True)
class ConfigRecord:
    """Validated monitoring configuration for one commander.

    Attributes:
        name: Trimmed display name (column A)
        resource_id: Spreadsheet id extracted from the commander's sheet URL
        resource_location: Tab inside that spreadsheet holding the numbers
        notification_endpoint: Trimmed webhook URL (column M)
        current_value_cell: Cell holding current supplies
        daily_delta_cell: Cell holding daily consumption
    """
    name: str
    resource_id: str
    resource_location: str
    notification_endpoint: str
    current_value_cell: str
    daily_delta_cell: str

    def to_dict(self) -> dict[str, Any]:
        """Shape consumed by the notification process."""
        return {
            "name": self.name,
            "sheetId": self.resource_id,
            "sheetName": self.resource_location,
            "webhookUrl": self.notification_endpoint,
            "currentSuppliesCell": self.current_value_cell,
            "dailyConsumptionCell": self.daily_delta_cell,
        }
