"""
Form Models
===========
Pydantic models for the form submissions this backend accepts.

Every form type has:
- A request model (what the frontend sends us)
- A fixed sheet in the Google spreadsheet mirror
- A fixed column order in that sheet (see services/row_mapper.py)

FORM TYPES SUPPORTED:
1. Contact - "Contact us" messages
2. Job Application - Applications for an open position
3. Get Started - Sales / onboarding requests
4. Resume Upload - Open applications with an uploaded resume
5. Newsletter - Newsletter signups (email only)

Author: Form Sync Team
"""

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class FormType(str, Enum):
    """
    The five kinds of form submission.

    The value doubles as the endpoint slug used by the sync proxy
    (POST /api/sync/<value>).
    """
    CONTACT = "contact"
    JOB_APPLICATION = "job-application"
    GET_STARTED = "get-started"
    RESUME_UPLOAD = "resume-upload"
    NEWSLETTER = "newsletter"

    @property
    def sheet_name(self) -> str:
        """Name of the sheet (tab) this form type is mirrored to."""
        return SHEET_NAMES[self]

    @classmethod
    def from_sheet_name(cls, sheet_name: str) -> "FormType":
        for form_type, name in SHEET_NAMES.items():
            if name == sheet_name:
                return form_type
        raise ValueError(f"Unknown sheet name: {sheet_name}")


# Fixed tab names in the destination spreadsheet
SHEET_NAMES = {
    FormType.CONTACT: "Contacts",
    FormType.JOB_APPLICATION: "Job Applications",
    FormType.GET_STARTED: "Get Started Requests",
    FormType.RESUME_UPLOAD: "Resume Uploads",
    FormType.NEWSLETTER: "Newsletter Subscribers",
}


class SheetTarget(BaseModel):
    """
    One destination in the spreadsheet: which spreadsheet, which tab.

    Built from the startup configuration and never changed afterwards.
    """
    model_config = ConfigDict(frozen=True)

    spreadsheet_id: str = Field(..., description="Google spreadsheet ID")
    sheet_name: str = Field(..., description="Sheet (tab) name")

    def append_url(self, api_base: str) -> str:
        """Build the values:append URL for this target."""
        sheet = quote(self.sheet_name, safe="")
        return f"{api_base.rstrip('/')}/{self.spreadsheet_id}/values/{sheet}:append"


# =============================================================================
# SUBMISSION MODELS - What the frontend sends us
# =============================================================================

class FormSubmission(BaseModel):
    """Base class for all form submissions."""
    model_config = ConfigDict(str_strip_whitespace=True)

    form_type: ClassVar[FormType]

    @property
    def timestamp(self) -> datetime:
        return self.created_at


class ContactSubmission(FormSubmission):
    """
    Contact form.

    Example Request:
        POST /api/forms/contact
        {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "message": "Hello!"
        }
    """
    form_type: ClassVar[FormType] = FormType.CONTACT

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    phone: Optional[str] = Field(None, max_length=50)
    company: Optional[str] = Field(None, max_length=200)
    message: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=utc_now, description="Submission time")


class JobApplicationSubmission(FormSubmission):
    """Application for a specific open position."""
    form_type: ClassVar[FormType] = FormType.JOB_APPLICATION

    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    phone: str = Field(..., min_length=1, max_length=50)
    position: str = Field(..., min_length=1, max_length=200)
    experience: str = Field(..., min_length=1)
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = Field(None, description="URL returned by POST /api/upload/resume")
    status: str = Field(default="pending", description="Review status")
    created_at: datetime = Field(default_factory=utc_now)


class GetStartedSubmission(FormSubmission):
    """'Get started' request from a prospective client."""
    form_type: ClassVar[FormType] = FormType.GET_STARTED

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=320)
    company: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    job_title: Optional[str] = Field(None, max_length=200)
    message: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class ResumeUploadSubmission(FormSubmission):
    """Open application with an uploaded resume."""
    form_type: ClassVar[FormType] = FormType.RESUME_UPLOAD

    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    phone: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=200)
    position_interested: Optional[str] = Field(None, max_length=200)
    experience_level: Optional[str] = Field(None, max_length=100)
    skills: Optional[str] = None
    cover_letter: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    resume_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class NewsletterSubscription(FormSubmission):
    """Newsletter signup. Uses subscribed_at instead of created_at."""
    form_type: ClassVar[FormType] = FormType.NEWSLETTER

    email: str = Field(..., min_length=3, max_length=320)
    subscribed_at: datetime = Field(default_factory=utc_now)

    @property
    def timestamp(self) -> datetime:
        return self.subscribed_at


SUBMISSION_MODELS = {
    FormType.CONTACT: ContactSubmission,
    FormType.JOB_APPLICATION: JobApplicationSubmission,
    FormType.GET_STARTED: GetStartedSubmission,
    FormType.RESUME_UPLOAD: ResumeUploadSubmission,
    FormType.NEWSLETTER: NewsletterSubscription,
}


# =============================================================================
# RESPONSE MODELS - What we send back to the frontend
# =============================================================================

class SubmissionResponse(BaseModel):
    """Response for a stored form submission."""
    success: bool = Field(..., description="Whether the submission was stored")
    data: dict = Field(..., description="The stored record")


class SubmissionListResponse(BaseModel):
    """Response containing the stored records of one form type."""
    success: bool = True
    data: list[dict] = Field(..., description="Stored records")
    total: int = Field(..., description="Number of records")
