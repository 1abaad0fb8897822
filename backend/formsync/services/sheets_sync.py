"""
Google Sheets Sync Service
==========================

One method per form type. Each one:
1. Builds the row (row_mapper.map_to_row)
2. Appends it to that form type's sheet (SheetClient.append_row)
3. Returns True/False

Nothing in here raises. A failed sync is a log line, not an error.

Author: Form Sync Team
"""

import logging

from formsync.models import (
    FormSubmission,
    ContactSubmission,
    JobApplicationSubmission,
    GetStartedSubmission,
    ResumeUploadSubmission,
    NewsletterSubscription,
)
from formsync.services.row_mapper import map_to_row
from formsync.services.sheet_client import SheetClient

logger = logging.getLogger(__name__)


class SheetsSyncService:
    """
    Mirrors form submissions to the spreadsheet.

    HOW TO USE:
    ----------
    service = SheetsSyncService(create_sheet_client(config.sheets))
    synced = await service.sync_contact(contact)
    """

    def __init__(self, client: SheetClient):
        self.client = client

    async def sync(self, submission: FormSubmission) -> bool:
        """Sync any submission to the sheet of its form type."""
        sheet_name = submission.form_type.sheet_name
        try:
            row = map_to_row(submission)
        except (ValueError, TypeError) as e:
            logger.error(f"[{sheet_name}] Could not build sheet row: {e}")
            return False

        return await self.client.append_row(
            sheet_name,
            [row],
            fields=submission.model_dump(mode="json"),
        )

    async def sync_contact(self, contact: ContactSubmission) -> bool:
        return await self.sync(contact)

    async def sync_job_application(self, application: JobApplicationSubmission) -> bool:
        return await self.sync(application)

    async def sync_get_started_request(self, request: GetStartedSubmission) -> bool:
        return await self.sync(request)

    async def sync_resume_upload(self, resume: ResumeUploadSubmission) -> bool:
        return await self.sync(resume)

    async def sync_newsletter_subscription(self, subscription: NewsletterSubscription) -> bool:
        return await self.sync(subscription)

    async def initialize_sheets(self) -> bool:
        """
        Check the configuration and say whether syncing will work.

        Header rows are NOT created here; the sheets have to be set up by hand
        with the columns listed in row_mapper.COLUMNS.
        """
        if not await self.client.is_configured():
            logger.warning("Google Sheets not configured. Skipping initialization.")
            return False

        logger.info("Google Sheets service initialized")
        return True

    async def close(self):
        await self.client.close()
