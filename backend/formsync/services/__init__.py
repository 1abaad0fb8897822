"""
Services Package
================

These are the "workers" that do the actual work.

- SubmissionStore: Saves form submissions (the part that must succeed)
- SheetClient: Talks to Google Sheets (directly or through a sync backend)
- SheetsSyncService: One sync method per form type
- run_with_background_sync: Saves first, mirrors to the sheet in the background
"""

from .submission_store import SubmissionStore, StoreError
from .row_mapper import COLUMNS, map_to_row, normalize_timestamp
from .sheet_client import (
    SheetClient,
    DirectSheetClient,
    ProxySheetClient,
    create_sheet_client,
)
from .sheets_sync import SheetsSyncService
from .background import BackgroundSyncRunner, run_with_background_sync

__all__ = [
    "SubmissionStore",
    "StoreError",
    "COLUMNS",
    "map_to_row",
    "normalize_timestamp",
    "SheetClient",
    "DirectSheetClient",
    "ProxySheetClient",
    "create_sheet_client",
    "SheetsSyncService",
    "BackgroundSyncRunner",
    "run_with_background_sync",
]
