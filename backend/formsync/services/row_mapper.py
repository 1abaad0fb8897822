"""
Row Mapper
==========

Turns a form submission into one spreadsheet row.

THE RULES:
---------
- Every form type has a FIXED column order (see COLUMNS below)
- The first cell is always the timestamp, as an ISO-8601 UTC instant
  with milliseconds: "2024-01-01T00:00:00.000Z"
- Missing optional fields become "" (never left out, never None)

The column order has to match the header row of the sheet by hand.
Nothing here reads the sheet's headers, so if someone reorders the sheet
the rows will quietly land in the wrong columns.

Author: Form Sync Team
"""

from datetime import datetime, timezone
from typing import Any, Union

from formsync.models import FormSubmission, FormType


SheetRow = list[str]

TIMESTAMP_COLUMN = "timestamp"

COLUMNS: dict[FormType, tuple[str, ...]] = {
    FormType.CONTACT: (
        "timestamp", "name", "email", "phone", "company", "message",
    ),
    FormType.JOB_APPLICATION: (
        "timestamp", "full_name", "email", "phone", "position", "experience",
        "cover_letter", "resume_url", "status",
    ),
    FormType.GET_STARTED: (
        "timestamp", "first_name", "last_name", "email", "company", "phone",
        "job_title", "message",
    ),
    FormType.RESUME_UPLOAD: (
        "timestamp", "full_name", "email", "phone", "location",
        "position_interested", "experience_level", "skills", "cover_letter",
        "linkedin_url", "portfolio_url", "resume_url",
    ),
    FormType.NEWSLETTER: (
        "timestamp", "email",
    ),
}


def normalize_timestamp(value: Union[datetime, str, int, float]) -> str:
    """
    Convert a timestamp to "YYYY-MM-DDTHH:MM:SS.mmmZ" (UTC).

    Accepts:
        - datetime (naive values are treated as UTC)
        - ISO-8601 string ("2024-01-01T00:00:00Z", "...+02:00", ...)
        - int/float epoch milliseconds

    Raises:
        ValueError: if the value can't be read as a timestamp
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")

    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, (int, float)):
        try:
            moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Invalid timestamp: {value!r}") from e
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        moment = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)

    millis = moment.microsecond // 1000
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return normalize_timestamp(value)
    return str(value)


def map_to_row(submission: FormSubmission) -> SheetRow:
    """
    Build the sheet row for a submission.

    Example:
        >>> map_to_row(ContactSubmission(name="A", email="a@x.com",
        ...            message="hi", created_at="2024-01-01T00:00:00Z"))
        ['2024-01-01T00:00:00.000Z', 'A', 'a@x.com', '', '', 'hi']
    """
    row = []
    for column in COLUMNS[submission.form_type]:
        if column == TIMESTAMP_COLUMN:
            row.append(normalize_timestamp(submission.timestamp))
        else:
            row.append(_cell(getattr(submission, column)))
    return row
