from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

"""Google Sheets values client.

Thin async wrapper over the Sheets v4 `values.get` endpoint. One call per
pipeline run; no retries are attempted here.
"""

logger = logging.getLogger(__name__)

API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class SheetsClientError(Exception):
    """Raised when a range cannot be fetched from the Sheets API."""


def build_range(tab_name: str, range_spec: str) -> str:
    """A1 notation with a quoted tab name, e.g. 'Commander Database'!A3:M."""
    escaped = tab_name.replace("'", "''")
    return f"'{escaped}'!{range_spec}"


class SheetsClient:
    """Fetches cell ranges from Google Sheets.

    Usable as an async context manager; a caller-supplied httpx.AsyncClient
    is used as-is and left open.
    """

    def __init__(
        self,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = API_BASE,
    ) -> None:
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        self._base_url = base_url.rstrip("/")

    async def __aenter__(self) -> SheetsClient:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_range(self, sheet_id: str, range_spec: str, tab_name: str) -> list[list[Any]]:
        """Return the rows of tab_name!range_spec (trailing empty cells omitted by the API)."""
        a1 = build_range(tab_name, range_spec)
        url = f"{self._base_url}/{quote(sheet_id, safe='')}/values/{quote(a1, safe='')}"
        params = {"majorDimension": "ROWS"}
        if self._api_key:
            params["key"] = self._api_key

        logger.debug(f"Fetching range {a1} from sheet {sheet_id}")
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SheetsClientError(
                f"failed to fetch {a1} from sheet {sheet_id}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise SheetsClientError(f"failed to fetch {a1} from sheet {sheet_id}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SheetsClientError(f"invalid response for {a1} from sheet {sheet_id}: {e}") from e
        values = payload.get("values") if isinstance(payload, dict) else None
        return values or []
