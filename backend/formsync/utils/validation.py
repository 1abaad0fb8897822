"""
Input Validation Utilities
===========================

Validation helpers for uploaded files and upload URLs.

Author: Form Sync Team
"""

import re
from pathlib import Path
from typing import Optional


UPLOAD_URL_PREFIX = "/api/uploads/"

RESUME_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
}


def sanitize_filename(name: str) -> str:
    """
    Sanitize a filename by removing dangerous characters.

    Args:
        name: Original filename

    Returns:
        Sanitized filename safe for filesystem
    """
    # Remove or replace dangerous characters
    sanitized = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '_', name)
    # Remove leading/trailing dots and spaces
    sanitized = sanitized.strip('. ')
    # Limit length
    return sanitized[:255]


def safe_extension(filename: Optional[str]) -> str:
    """
    Extension of an uploaded file, lowercased, or "" if it looks odd.

    Example:
        safe_extension("Photo.JPG") -> ".jpg"
        safe_extension("evil.p h p") -> ""
    """
    if not filename:
        return ""
    suffix = Path(sanitize_filename(filename)).suffix.lower()
    if re.match(r'^\.[a-z0-9]{1,10}$', suffix):
        return suffix
    return ""


def is_image_content_type(content_type: Optional[str]) -> bool:
    """Only image/* uploads are accepted as images."""
    return bool(content_type) and content_type.lower().startswith("image/")


def is_resume_content_type(content_type: Optional[str]) -> bool:
    """PDF, Word or plain text."""
    if not content_type:
        return False
    return content_type.split(";")[0].strip().lower() in RESUME_CONTENT_TYPES


def resolve_upload_url(url: Optional[str], upload_dir: Path) -> Optional[Path]:
    """
    Turn an upload URL back into a file path inside upload_dir.

    Returns None when the URL doesn't point inside the upload directory
    (wrong prefix, "..", absolute paths, ...).

    Example:
        resolve_upload_url("/api/uploads/image-1-2.png", Path("uploads"))
            -> <abs path>/uploads/image-1-2.png
        resolve_upload_url("/api/uploads/../main.py", Path("uploads"))
            -> None
    """
    if not url or not url.startswith(UPLOAD_URL_PREFIX):
        return None

    relative = url[len(UPLOAD_URL_PREFIX):]
    if not relative or "\x00" in relative:
        return None

    root = upload_dir.resolve()
    candidate = (root / relative).resolve()
    if candidate == root or not candidate.is_relative_to(root):
        return None
    return candidate
