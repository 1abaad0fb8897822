"""
Models Package
==============

This is where all our data models live.
Import from here instead of the individual files.

Example:
    from formsync.models import FormType, ContactSubmission
"""

from .forms import (
    # Form kinds and where they are mirrored to
    FormType,
    SHEET_NAMES,
    SheetTarget,

    # What the frontend sends us
    FormSubmission,
    ContactSubmission,
    JobApplicationSubmission,
    GetStartedSubmission,
    ResumeUploadSubmission,
    NewsletterSubscription,
    SUBMISSION_MODELS,

    # What we send back to the frontend
    SubmissionResponse,
    SubmissionListResponse,
)

__all__ = [
    "FormType",
    "SHEET_NAMES",
    "SheetTarget",
    "FormSubmission",
    "ContactSubmission",
    "JobApplicationSubmission",
    "GetStartedSubmission",
    "ResumeUploadSubmission",
    "NewsletterSubscription",
    "SUBMISSION_MODELS",
    "SubmissionResponse",
    "SubmissionListResponse",
]
