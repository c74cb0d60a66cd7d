from __future__ import annotations

from dataclasses import dataclass

"""SheetLayout model for the Commander Database sheet.

The column positions and fixed constants below are the de facto schema
contract with the database sheet. They live in one place so the layout can be
overridden from config/layout.yml without touching discovery code.
"""

__all__ = [
    "SheetLayout",
    "DEFAULT_LAYOUT",
]


@dataclass(frozen=True)
class SheetLayout:
    """Where discovery reads its fields and which constants it stamps on records.

    Column positions are 0-based indexes into a fetched row (0 = column A).
    first_row is the sheet row number of the first fetched row; rows 1-2 are
    header rows that are never requested.
    """
    name_column: int = 0  # A
    url_column: int = 2  # C
    endpoint_column: int = 12  # M
    resource_location: str = "Sheet1"
    current_value_cell: str = "C9"
    daily_delta_cell: str = "C11"
    tab_name: str = "Commander Database"
    range_spec: str = "A3:M"
    first_row: int = 3

    @property
    def width(self) -> int:
        """Minimum row width needed to read every configured column."""
        return max(self.name_column, self.url_column, self.endpoint_column) + 1


DEFAULT_LAYOUT = SheetLayout()
