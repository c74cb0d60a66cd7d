from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from supply_monitor.config.loader import ConfigError, Settings, load_settings
from supply_monitor.logging.error_log import ErrorLogBuffer
from supply_monitor.logging.init import log_summary, set_debug, setup_logging
from supply_monitor.models.row_outcome import DiscoveryResult
from supply_monitor.services.pipeline import ConfigLoadingError, load_discovery
from supply_monitor.services.summary import render_summary_line
from supply_monitor.sheets.client import SheetsClient

"""CLI entrypoint.

- Load .env, then settings from the environment
- Fetch and validate the Commander Database
- Print a SUMMARY line (and the records as JSON with --json)
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; values already in the environment win."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Commander Database configuration loader")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--layout", type=Path, default=None, help="YAML layout override")
    p.add_argument("--json", action="store_true", help="Print loaded records as JSON")
    p.add_argument(
        "--write-skipped", action="store_true", help="Write skipped rows to logs/skipped-*.log"
    )
    return p.parse_args(argv)


async def _run(settings: Settings) -> DiscoveryResult:
    async with SheetsClient(api_key=settings.api_key) as client:
        return await load_discovery(settings, client)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        try:
            settings = load_settings(os.environ, layout_path=args.layout)
        except ConfigError as e:
            raise ConfigLoadingError(f"Configuration loading failed: {e}") from e
        result = asyncio.run(_run(settings))
    except ConfigLoadingError as e:
        logger.error(str(e))
        return EXIT_FATAL

    if args.write_skipped and result.skipped:
        buffer = ErrorLogBuffer.from_result(
            result, settings.database_sheet_id, settings.layout.tab_name
        )
        counts = ", ".join(f"{k}={v}" for k, v in sorted(buffer.counts_by_type().items()))
        path = buffer.flush()
        logger.info(f"skipped rows written to {path} ({counts})")

    if args.json:
        print(json.dumps([r.to_dict() for r in result.records], ensure_ascii=False, indent=2))

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
