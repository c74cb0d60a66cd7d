from __future__ import annotations

from supply_monitor.models.row_outcome import DiscoveryResult

"""SUMMARY line rendering."""


def render_summary_line(result: DiscoveryResult) -> str:
    """Render the SUMMARY line for a discovery run.

    Examples:
        >>> render_summary_line(DiscoveryResult(records=[], skipped=[], total_rows=4))
        'SUMMARY rows=4 records=0 skipped=0'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"records={len(result.records)} "
        f"skipped={len(result.skipped)}"
    )
