"""
Sync API Router
===============

The "proxy" side of the Google Sheets mirror.

A frontend (or another instance of this backend running in proxy mode)
can't hold write credentials for the spreadsheet, so it sends the form
fields here and we do the Google call.

ENDPOINTS:
---------
GET  /api/sync/status       - {"success": true, "data": {"configured": bool}}
POST /api/sync/{form_type}  - {"success": bool, "synced": bool, "error"?: str}

form_type is one of: contact, job-application, get-started,
resume-upload, newsletter

These endpoints always use the DIRECT client, so a backend in proxy mode
pointed at itself can't loop.

Author: Form Sync Team
"""

import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from formsync.dependencies import get_direct_sheets_sync
from formsync.models import FormType, SUBMISSION_MODELS
from formsync.services import SheetsSyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sync", tags=["sync"])


@router.get("/status")
async def sync_status(sheets: SheetsSyncService = Depends(get_direct_sheets_sync)):
    """Is the spreadsheet mirror configured on this backend?"""
    configured = await sheets.client.is_configured()
    return {"success": True, "data": {"configured": configured}}


@router.post("/{form_type}")
async def sync_submission(
    form_type: FormType,
    payload: dict = Body(...),
    sheets: SheetsSyncService = Depends(get_direct_sheets_sync),
):
    """
    Append one submission to its sheet.

    The body is the submission's fields, exactly as the form endpoints take
    them (see /api/forms/...).
    """
    model = SUBMISSION_MODELS[form_type]
    try:
        submission = model.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"[sync] Rejected {form_type.value} payload: {e.error_count()} validation error(s)")
        return JSONResponse(
            status_code=400,
            content={"success": False, "synced": False, "error": f"Invalid {form_type.value} payload"},
        )

    synced = await sheets.sync(submission)
    return {"success": True, "synced": synced}
