"""
Utility modules for the form sync backend.
"""

from formsync.utils.validation import (
    UPLOAD_URL_PREFIX,
    sanitize_filename,
    safe_extension,
    is_image_content_type,
    is_resume_content_type,
    resolve_upload_url,
)

__all__ = [
    "UPLOAD_URL_PREFIX",
    "sanitize_filename",
    "safe_extension",
    "is_image_content_type",
    "is_resume_content_type",
    "resolve_upload_url",
]
