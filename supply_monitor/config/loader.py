from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from supply_monitor.models.layout import DEFAULT_LAYOUT, SheetLayout

"""Settings loader.

Responsibilities:
- Read the database sheet id (and optional API key) from an explicit
  environment mapping; the CLI passes os.environ after loading .env
- Load an optional YAML layout override and validate it against
  layout_schema.json
- Fall back to DEFAULT_LAYOUT when no override is given
"""

ENV_SHEET_ID = "DATABASE_SHEET_ID"
ENV_API_KEY = "GOOGLE_SHEETS_API_KEY"
ENV_LAYOUT = "SUPPLY_MONITOR_LAYOUT"

SCHEMA_PATH = Path(__file__).parent / "layout_schema.json"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    database_sheet_id: str
    api_key: str | None
    layout: SheetLayout = DEFAULT_LAYOUT


def _validate_layout_schema(data: dict[str, Any]) -> None:
    """Validate layout override data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            data fails schema validation (unknown keys, wrong types, bad cell
            addresses).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"layout schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_layout(path: Path) -> SheetLayout:
    if not path.exists():
        raise ConfigError(f"layout file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"layout file must contain a mapping: {path}")

    _validate_layout_schema(data)

    known = {f.name for f in fields(SheetLayout)}
    return SheetLayout(**{k: v for k, v in data.items() if k in known})


def load_settings(environ: Mapping[str, str], layout_path: Path | None = None) -> Settings:
    """Build Settings from an environment mapping.

    layout_path wins over the SUPPLY_MONITOR_LAYOUT variable. Raises
    ConfigError when DATABASE_SHEET_ID is missing or blank.
    """
    sheet_id = (environ.get(ENV_SHEET_ID) or "").strip()
    if not sheet_id:
        raise ConfigError(f"{ENV_SHEET_ID} environment variable is required")

    api_key = (environ.get(ENV_API_KEY) or "").strip() or None

    if layout_path is None and environ.get(ENV_LAYOUT):
        layout_path = Path(environ[ENV_LAYOUT])
    layout = load_layout(layout_path) if layout_path is not None else DEFAULT_LAYOUT

    return Settings(database_sheet_id=sheet_id, api_key=api_key, layout=layout)
