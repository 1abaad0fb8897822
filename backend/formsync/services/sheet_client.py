"""
Google Sheets Client
====================

Appends rows to the Google spreadsheet mirror.

TWO WAYS TO DO IT:
-----------------
1. DirectSheetClient - talks to the Google Sheets API itself
       POST https://sheets.googleapis.com/v4/spreadsheets/<id>/values/<sheet>:append
            ?valueInputOption=RAW&key=<api key>
       body: {"values": [[...row...]]}

2. ProxySheetClient - talks to a sync backend that does the Google call
   for us (our own /api/sync router, see routers/sync.py)
       GET  <proxy>/status        -> {"success": true, "data": {"configured": true}}
       POST <proxy>/<form-type>   -> {"success": true, "synced": true}

Both behave the same way from the outside:
- append_row() returns True or False
- append_row() NEVER raises

This is a best-effort side channel. The spreadsheet is allowed to miss
rows; the form submission itself must never fail because of it.

Author: Form Sync Team
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from formsync.config import SheetsConfig
from formsync.models import FormType, SheetTarget

logger = logging.getLogger(__name__)


AUTH_FAILURE_STATUSES = (401, 403)


class SheetClient(ABC):
    """
    Common interface for the two client strategies.

    HOW TO USE:
    ----------
    client = create_sheet_client(config.sheets)

    if await client.append_row("Contacts", [["2024-01-01T00:00:00.000Z", "Ada", ...]]):
        print("Mirrored!")

    await client.close()
    """

    def __init__(self, config: SheetsConfig, http_client: Optional[httpx.AsyncClient] = None):
        """
        Args:
            config: Spreadsheet settings (read-only)
            http_client: Optional shared client. If not given we make our own
                         and close it in close().
        """
        self.config = config
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=config.request_timeout)

    @abstractmethod
    async def is_configured(self) -> bool:
        """Can we expect an append to work at all?"""

    @abstractmethod
    async def _send(self, sheet_name: str, rows: list[list[str]], fields: Optional[dict]) -> bool:
        """Do the actual HTTP call. May raise; append_row() catches."""

    async def append_row(
        self,
        sheet_name: str,
        rows: list[list[str]],
        fields: Optional[dict] = None,
    ) -> bool:
        """
        Append rows to a sheet.

        Args:
            sheet_name: Tab to append to (like "Contacts")
            rows: Rows of string cells, in the sheet's column order
            fields: The submission as a JSON-able dict (used by the proxy)

        Returns:
            True if the spreadsheet accepted the rows, False otherwise.
        """
        if not await self.is_configured():
            logger.warning(f"[{sheet_name}] Google Sheets not configured, skipping sync")
            return False

        try:
            return await self._send(sheet_name, rows, fields)
        except httpx.HTTPStatusError as e:
            return self._log_status_failure(sheet_name, e.response)
        except httpx.TimeoutException:
            logger.error(f"[{sheet_name}] Google Sheets sync timed out after {self.config.request_timeout}s")
            return False
        except httpx.HTTPError as e:
            logger.error(f"[{sheet_name}] Google Sheets sync network error: {e}")
            return False
        except Exception as e:
            logger.error(f"[{sheet_name}] Google Sheets sync failed: {e}", exc_info=True)
            return False

    def _log_status_failure(self, sheet_name: str, response: httpx.Response) -> bool:
        error_body = response.text[:500]

        if response.status_code in AUTH_FAILURE_STATUSES:
            logger.warning(
                f"[{sheet_name}] Google Sheets rejected the credential (HTTP {response.status_code}). "
                f"API keys are read-only: appending rows needs OAuth or a service account, "
                f"so use proxy mode or a key with write access. Response: {error_body}"
            )
        else:
            logger.error(f"[{sheet_name}] Google Sheets sync failed - HTTP {response.status_code}: {error_body}")
        return False

    async def close(self):
        """Clean up when we're done. Only closes a client we created."""
        if self._owns_client:
            await self.http_client.aclose()


# =============================================================================
# DIRECT MODE - call the Google Sheets API ourselves
# =============================================================================

class DirectSheetClient(SheetClient):
    """Appends rows straight to the Google Sheets API using an API key."""

    async def is_configured(self) -> bool:
        return self.config.has_credentials

    def target(self, sheet_name: str) -> SheetTarget:
        return SheetTarget(spreadsheet_id=self.config.spreadsheet_id, sheet_name=sheet_name)

    async def _send(self, sheet_name: str, rows: list[list[str]], fields: Optional[dict]) -> bool:
        url = self.target(sheet_name).append_url(self.config.api_base)
        params = {"valueInputOption": "RAW", "key": self.config.api_key}

        response = await self.http_client.post(url, params=params, json={"values": rows})
        response.raise_for_status()

        logger.info(f"[{sheet_name}] Successfully synced {len(rows)} row(s) to Google Sheets")
        return True


# =============================================================================
# PROXY MODE - let a sync backend do the Google call
# =============================================================================

class ProxySheetClient(SheetClient):
    """Sends submissions to a sync backend (see routers/sync.py)."""

    @property
    def base_url(self) -> str:
        return self.config.proxy_url.rstrip("/")

    async def is_configured(self) -> bool:
        """Ask the sync backend whether IT has spreadsheet credentials."""
        try:
            response = await self.http_client.get(f"{self.base_url}/status")
            if response.status_code != 200:
                return False
            result = response.json()
            return bool(result.get("success") and result.get("data", {}).get("configured"))
        except Exception as e:
            logger.error(f"Error checking Google Sheets configuration: {e}")
            return False

    async def _send(self, sheet_name: str, rows: list[list[str]], fields: Optional[dict]) -> bool:
        endpoint = FormType.from_sheet_name(sheet_name).value
        body = fields if fields is not None else {"values": rows}

        response = await self.http_client.post(f"{self.base_url}/{endpoint}", json=body)
        response.raise_for_status()

        result = response.json()
        if not result.get("success"):
            logger.error(f"[{sheet_name}] Sync backend reported failure: {result.get('error') or 'Sync failed'}")
            return False

        synced = bool(result.get("synced"))
        logger.info(f"[{sheet_name}] Sync backend answered for {endpoint}: synced={synced}")
        return synced


def create_sheet_client(config: SheetsConfig, http_client: Optional[httpx.AsyncClient] = None) -> SheetClient:
    """Pick the client strategy from config.mode."""
    if config.mode == "proxy":
        return ProxySheetClient(config, http_client)
    return DirectSheetClient(config, http_client)
