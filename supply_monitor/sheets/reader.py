from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pandas as pd

"""Grid normalization for fetched sheet rows.

The Sheets API omits trailing empty cells, so rows arrive ragged. The grid is
squared to a fixed width through a DataFrame; missing cells become None.
Empty rows are kept so row numbering stays aligned with the sheet.
"""

__all__ = [
    "normalize_grid",
]


def normalize_grid(rows: Sequence[Sequence[Any]] | None, width: int) -> list[list[Any]]:
    """Pad every row to at least `width` cells and map NaN/None to None.

    Parameters
    ----------
    rows: raw rows as returned by the sheets client
    width: minimum column count (SheetLayout.width)
    """
    if not rows:
        return []
    df = pd.DataFrame([list(r) if r is not None else [] for r in rows], dtype=object)
    for col in range(df.shape[1], width):
        df[col] = None
    df = df.astype(object).where(pd.notna(df), None)
    return [list(values) for values in df.itertuples(index=False, name=None)]
