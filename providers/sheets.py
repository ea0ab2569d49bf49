import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from services.errors import ProviderConfigError, ProviderError
from .base import BaseProvider
from .credentials import TokenFileCredentials

BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"


class GoogleSheetsProvider(BaseProvider):
    def __init__(
        self,
        sheet_id: str,
        sheet_name: str,
        api_key: Optional[str] = None,
        credentials: Optional[TokenFileCredentials] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._sheet_id = sheet_id
        self._sheet_name = sheet_name
        self._api_key = api_key
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport
        self._log = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return "google_sheets"

    def _check_config(self) -> None:
        if not self._sheet_id:
            raise ProviderConfigError(self.name, "GOOGLE_SHEET_ID not set")
        if not self._sheet_name:
            raise ProviderConfigError(self.name, "SHEET_NAME not set")

    def _values_url(self) -> str:
        read_range = f"{self._sheet_name}!A:B"
        return f"{BASE_URL}/{quote(self._sheet_id, safe='')}/values/{quote(read_range, safe='')}"

    async def _auth(self) -> Dict[str, Any]:
        if self._api_key:
            return {"params": {"key": self._api_key}}
        if self._credentials is not None and self._credentials.is_configured():
            token = await self._credentials.token()
            return {"headers": {"Authorization": f"Bearer {token}"}}
        raise ProviderError(self.name, "no credentials: set GOOGLE_SHEETS_API_KEY or provide a token file")

    async def query(self) -> List[List[Any]]:
        self._check_config()
        auth = await self._auth()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(self._values_url(), **auth)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            self._log.error("Sheets HTTP error %s: %s", e.response.status_code, e.response.text[:200])
            raise ProviderError(self.name, f"HTTP error {e.response.status_code}")
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"request failed: {e}")
        except ValueError as e:
            raise ProviderError(self.name, f"invalid JSON payload: {e}")

        if not isinstance(data, dict):
            raise ProviderError(self.name, "unexpected payload shape")
        values = data.get("values") or []
        if not isinstance(values, list):
            raise ProviderError(self.name, "unexpected 'values' shape")
        rows = [row if isinstance(row, list) else [] for row in values]
        self._log.info("queried %d rows", len(rows))
        return rows
