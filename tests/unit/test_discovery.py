from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from supply_monitor.models import (
    SKIP_INVALID_RESOURCE_URL,
    SKIP_MISSING_FIELDS,
    ConfigRecord,
    RowSkip,
    SheetLayout,
)
from supply_monitor.services.discovery import (
    EmptySourceError,
    NoValidRecordsError,
    discover_records,
    evaluate_row,
    scan_rows,
)
from supply_monitor.services.validation import InvalidEndpointError

SHEET_1 = "https://docs.google.com/spreadsheets/d/1AbCdEfG/edit"
SHEET_2 = "https://docs.google.com/spreadsheets/d/1ZyXwVu"
HOOK_1 = "https://discord.com/api/webhooks/123/abc"
HOOK_2 = "https://discord.com/api/webhooks/456/def"


def test_end_to_end_scenario(sample_rows):
    records = discover_records(sample_rows)
    assert records == [
        ConfigRecord(
            name="Saraian 1st Army",
            resource_id="1AbCdEfG",
            resource_location="Sheet1",
            notification_endpoint=HOOK_1,
            current_value_cell="C9",
            daily_delta_cell="C11",
        ),
        ConfigRecord(
            name="Keltic Raiders",
            resource_id="1ZyXwVu",
            resource_location="Sheet1",
            notification_endpoint=HOOK_2,
            current_value_cell="C9",
            daily_delta_cell="C11",
        ),
    ]


def test_all_valid_rows_map_one_to_one_in_order(make_row):
    rows = [
        make_row(f"Commander {i}", f"https://docs.google.com/spreadsheets/d/id{i}/edit", HOOK_1)
        for i in range(5)
    ]
    records = discover_records(rows)
    assert [r.name for r in records] == [f"Commander {i}" for i in range(5)]
    assert [r.resource_id for r in records] == [f"id{i}" for i in range(5)]


def test_name_and_endpoint_are_trimmed(make_row):
    records = discover_records([make_row("  Keltic Raiders \t", f" {SHEET_2} ", f"  {HOOK_2}\n")])
    assert records[0].name == "Keltic Raiders"
    assert records[0].notification_endpoint == HOOK_2
    assert records[0].resource_id == "1ZyXwVu"


def test_invalid_rows_are_skipped_and_valid_order_kept(make_row):
    rows = [
        make_row("No Url", None, HOOK_1),
        make_row("Saraian 1st Army", SHEET_1, HOOK_1),
        make_row("Bad Url", "https://example.com/sheet", HOOK_1),
        make_row("   ", SHEET_1, HOOK_1),
        make_row("Keltic Raiders", SHEET_2, HOOK_2),
        make_row("No Hook", SHEET_2, "   "),
    ]
    result = scan_rows(rows)
    assert [r.name for r in result.records] == ["Saraian 1st Army", "Keltic Raiders"]
    assert [s.row_number for s in result.skipped] == [3, 5, 6, 8]
    assert [s.error_type for s in result.skipped] == [
        SKIP_MISSING_FIELDS,
        SKIP_INVALID_RESOURCE_URL,
        SKIP_MISSING_FIELDS,
        SKIP_MISSING_FIELDS,
    ]
    assert result.total_rows == 6


def test_short_rows_are_treated_as_missing_fields():
    result = scan_rows([["Only a name"], [], None, ["A", "", SHEET_1] + [""] * 9 + [HOOK_1]])
    assert len(result.records) == 1
    assert len(result.skipped) == 3


def test_nan_cells_count_as_missing(make_row):
    outcome = evaluate_row(make_row("Name", float("nan"), HOOK_1), 3)
    assert isinstance(outcome, RowSkip)
    assert outcome.error_type == SKIP_MISSING_FIELDS


def test_missing_fields_skip_names_which_fields(caplog, make_row):
    with caplog.at_level(logging.DEBUG, logger="supply_monitor"):
        result = scan_rows([make_row("Name", "", HOOK_1), make_row("Ok", SHEET_1, HOOK_1)])
    assert result.skipped[0].reason == (
        "missing required fields (name: True, sheetUrl: False, webhookUrl: True)"
    )
    assert "Skipping row 3: missing required fields" in caplog.text
    debug_records = [r for r in caplog.records if "Skipping row 3" in r.getMessage()]
    assert debug_records[0].levelno == logging.DEBUG


def test_bad_url_skip_is_logged_as_warning(caplog, make_row):
    with caplog.at_level(logging.DEBUG, logger="supply_monitor"):
        scan_rows([make_row("Bad", "https://example.com", HOOK_1), make_row("Ok", SHEET_1, HOOK_1)])
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].getMessage() == (
        "Skipping row 3 (Bad): Invalid Google Sheets URL: https://example.com"
    )


@pytest.mark.parametrize("rows", [None, []])
def test_empty_source(rows):
    with pytest.raises(EmptySourceError):
        discover_records(rows)


def test_no_valid_records_is_distinct_from_empty_source(make_row):
    rows = [make_row("", "", ""), make_row("Bad", "https://example.com", HOOK_1)]
    with pytest.raises(NoValidRecordsError) as e:
        discover_records(rows)
    assert not isinstance(e.value, EmptySourceError)
    assert "No valid commander configurations" in str(e.value)


def test_survivors_are_validated(make_row):
    rows = [make_row("Saraian 1st Army", SHEET_1, "not-a-webhook")]
    with pytest.raises(InvalidEndpointError):
        discover_records(rows)


def test_validate_records_called_with_survivors(make_row):
    with patch("supply_monitor.services.discovery.validate_records") as mock_validate:
        records = discover_records([make_row("A", SHEET_1, HOOK_1), make_row("", "", "")])
    mock_validate.assert_called_once_with(records)


def test_custom_layout_changes_columns_and_numbering():
    layout = SheetLayout(name_column=0, url_column=1, endpoint_column=2, first_row=10,
                         current_value_cell="D4", daily_delta_cell="D5")
    result = scan_rows([["", "", ""], ["Alpha", SHEET_1, HOOK_1]], layout)
    assert result.skipped[0].row_number == 10
    assert result.records[0].current_value_cell == "D4"
    assert result.records[0].daily_delta_cell == "D5"
