"""
Dependency Injection
====================

Gives the endpoints access to the services.

The app's lifespan builds everything once at startup and hands it over
with set_services(). Endpoints then ask for what they need with Depends():

    @router.post("/contact")
    async def submit_contact(body: ContactSubmission,
                             store = Depends(get_store)):
        ...
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException

from formsync.config import Config
from formsync.services import BackgroundSyncRunner, SheetsSyncService, SubmissionStore


@dataclass
class AppServices:
    """Everything built at startup."""
    config: Config
    store: SubmissionStore
    # Sync used by the form endpoints (direct or proxy, depending on config)
    sheets_sync: SheetsSyncService
    # Sync used by the /api/sync proxy endpoints (always direct)
    direct_sheets_sync: SheetsSyncService
    background: BackgroundSyncRunner


_services: Optional[AppServices] = None  # This gets set when the app starts


def set_services(services: Optional[AppServices]):
    """Called by the lifespan at startup (and with None at shutdown)."""
    global _services
    _services = services


def get_services() -> AppServices:
    if _services is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _services


def get_config() -> Config:
    return get_services().config


def get_store() -> SubmissionStore:
    return get_services().store


def get_sheets_sync() -> SheetsSyncService:
    return get_services().sheets_sync


def get_direct_sheets_sync() -> SheetsSyncService:
    return get_services().direct_sheets_sync


def get_background_runner() -> BackgroundSyncRunner:
    return get_services().background
