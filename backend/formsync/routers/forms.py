"""
Forms API Router
================

Where the website's forms get submitted.

HOW IT WORKS:
------------
1. Frontend POSTs the form as JSON
2. We save it in the submission store (this MUST work)
3. We answer right away with the stored record
4. In the background, the record is mirrored to Google Sheets
   (if that fails we log it; the submitter still sees success)

ALL ENDPOINTS:
-------------
POST /api/forms/contact           - Contact form
POST /api/forms/job-applications  - Job application
POST /api/forms/get-started       - "Get started" request
POST /api/forms/resume-uploads    - Resume upload (after POST /api/upload/resume)
POST /api/forms/newsletter        - Newsletter signup
GET  /api/forms/{form_type}       - List stored submissions of one type

Author: Form Sync Team
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from formsync.dependencies import get_background_runner, get_sheets_sync, get_store
from formsync.models import (
    FormType,
    FormSubmission,
    ContactSubmission,
    JobApplicationSubmission,
    GetStartedSubmission,
    ResumeUploadSubmission,
    NewsletterSubscription,
    SubmissionResponse,
    SubmissionListResponse,
)
from formsync.services import (
    BackgroundSyncRunner,
    SheetsSyncService,
    StoreError,
    SubmissionStore,
    run_with_background_sync,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["forms"])


async def _store_and_sync(
    submission: FormSubmission,
    store: SubmissionStore,
    sync_operation,
    runner: BackgroundSyncRunner,
) -> SubmissionResponse:
    try:
        record = await run_with_background_sync(
            lambda: store.save(submission),
            lambda: sync_operation(submission),
            spawner=runner,
        )
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return SubmissionResponse(success=True, data=record)


@router.post("/contact", response_model=SubmissionResponse)
async def submit_contact(
    body: ContactSubmission,
    store: SubmissionStore = Depends(get_store),
    sheets: SheetsSyncService = Depends(get_sheets_sync),
    runner: BackgroundSyncRunner = Depends(get_background_runner),
):
    """Submit the contact form."""
    return await _store_and_sync(body, store, sheets.sync_contact, runner)


@router.post("/job-applications", response_model=SubmissionResponse)
async def submit_job_application(
    body: JobApplicationSubmission,
    store: SubmissionStore = Depends(get_store),
    sheets: SheetsSyncService = Depends(get_sheets_sync),
    runner: BackgroundSyncRunner = Depends(get_background_runner),
):
    """
    Apply for a position.

    Upload the resume first (POST /api/upload/resume) and send the URL
    you got back as resume_url.
    """
    return await _store_and_sync(body, store, sheets.sync_job_application, runner)


@router.post("/get-started", response_model=SubmissionResponse)
async def submit_get_started(
    body: GetStartedSubmission,
    store: SubmissionStore = Depends(get_store),
    sheets: SheetsSyncService = Depends(get_sheets_sync),
    runner: BackgroundSyncRunner = Depends(get_background_runner),
):
    """Submit a "get started" request."""
    return await _store_and_sync(body, store, sheets.sync_get_started_request, runner)


@router.post("/resume-uploads", response_model=SubmissionResponse)
async def submit_resume_upload(
    body: ResumeUploadSubmission,
    store: SubmissionStore = Depends(get_store),
    sheets: SheetsSyncService = Depends(get_sheets_sync),
    runner: BackgroundSyncRunner = Depends(get_background_runner),
):
    """Submit an open application with a resume."""
    return await _store_and_sync(body, store, sheets.sync_resume_upload, runner)


@router.post("/newsletter", response_model=SubmissionResponse)
async def subscribe_newsletter(
    body: NewsletterSubscription,
    store: SubmissionStore = Depends(get_store),
    sheets: SheetsSyncService = Depends(get_sheets_sync),
    runner: BackgroundSyncRunner = Depends(get_background_runner),
):
    """Sign up for the newsletter."""
    return await _store_and_sync(body, store, sheets.sync_newsletter_subscription, runner)


@router.get("/{form_type}", response_model=SubmissionListResponse)
async def list_submissions(form_type: FormType, store: SubmissionStore = Depends(get_store)):
    """
    List stored submissions of one form type.

    form_type is one of: contact, job-application, get-started,
    resume-upload, newsletter
    """
    records = store.list_records(form_type)
    return SubmissionListResponse(data=records, total=len(records))
