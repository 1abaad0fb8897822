"""
Upload API Router
=================

Receives images (blog/job post pictures) and resumes and stores them on disk.

ENDPOINTS:
---------
POST   /api/upload/image   - multipart field "image", image/* only, max 5 MB
POST   /api/upload/resume  - multipart field "resume", PDF/Word/text, max 10 MB
DELETE /api/upload/image   - {"url": "/api/uploads/image-..."}
DELETE /api/upload/resume  - {"url": "/api/uploads/resumes/resume-..."}

Accepted files are served back from /api/uploads/... (see main.py).

Rejected uploads get a structured error and nothing is left on disk:
    {"success": false, "error": "Only image files are allowed"}

Author: Form Sync Team
"""

import logging
import random
import time
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from formsync.config import Config
from formsync.dependencies import get_config
from formsync.utils.validation import (
    UPLOAD_URL_PREFIX,
    is_image_content_type,
    is_resume_content_type,
    resolve_upload_url,
    safe_extension,
    sanitize_filename,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["upload"])

CHUNK_SIZE = 1024 * 1024


class UploadRejected(Exception):
    """An upload we won't accept. Turned into {"success": false, "error": ...}."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def upload_rejected_handler(request: Request, exc: UploadRejected) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


class DeleteUploadRequest(BaseModel):
    url: Optional[str] = Field(None, description="URL returned by the upload endpoint")


# =============================================================================
# HELPERS
# =============================================================================

def _unique_name(prefix: str, original_filename: Optional[str]) -> str:
    """Like "image-1704067200000-123456789.png"."""
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}"
    return f"{prefix}-{unique_suffix}{safe_extension(original_filename)}"


def _human_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size // (1024 * 1024)}MB"
    return f"{size // 1024}KB"


async def _save_upload(file: UploadFile, destination: Path, max_size: int) -> int:
    """
    Stream the upload to disk, giving up as soon as it gets too big.

    Returns:
        Number of bytes written

    Raises:
        UploadRejected: if the file is larger than max_size (the partial
                        file is removed)
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    size = 0
    try:
        with open(destination, "wb") as out:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_size:
                    raise UploadRejected(
                        f"File too large. Maximum size is {_human_size(max_size)}",
                        status_code=413,
                    )
                out.write(chunk)
    except BaseException:
        destination.unlink(missing_ok=True)
        raise
    return size


def _delete_upload(url: Optional[str], upload_dir: Path, folder: Path) -> dict:
    """Delete an upload, but only if it lives directly in folder."""
    path = resolve_upload_url(url, upload_dir)
    if path is None or path.parent != folder.resolve():
        if url:
            logger.warning(f"Ignoring delete for URL outside {folder}: {url}")
    elif path.is_file():
        path.unlink()
        logger.info(f"Deleted upload: {path.name}")

    return {"success": True, "message": "File deleted successfully"}


# =============================================================================
# IMAGES
# =============================================================================

@router.post("/image")
async def upload_image(
    image: Optional[UploadFile] = File(None, description="Image file (PNG, JPG, GIF, ...)"),
    config: Config = Depends(get_config),
):
    """
    Upload an image.

    **Body:** multipart form with the file in the field `image`

    **Returns:**
        {"success": true, "data": {"url": "/api/uploads/image-...", "filename": ...,
                                   "size": ..., "mimetype": ...}}
    """
    if image is None or not image.filename:
        logger.warning("Upload rejected: No valid image file provided")
        raise UploadRejected(
            "No valid image file provided. Please upload a valid image file (PNG, JPG, GIF, etc.)"
        )

    if not is_image_content_type(image.content_type):
        logger.warning(f"Rejected file upload: {image.filename} ({image.content_type or 'no mimetype'})")
        raise UploadRejected("Only image files are allowed")

    stored_name = _unique_name("image", image.filename)
    size = await _save_upload(image, config.upload_dir / stored_name, config.max_image_size)

    logger.info(f"Image upload successful: {image.filename} -> {stored_name}")
    return {
        "success": True,
        "data": {
            "url": f"{UPLOAD_URL_PREFIX}{stored_name}",
            "filename": sanitize_filename(image.filename),
            "size": size,
            "mimetype": image.content_type,
        },
    }


@router.delete("/image")
async def delete_image(body: DeleteUploadRequest, config: Config = Depends(get_config)):
    """
    Delete an uploaded image.

    Always answers success, even if the file was already gone.
    """
    return _delete_upload(body.url, config.upload_dir, config.upload_dir)


# =============================================================================
# RESUMES
# =============================================================================

@router.post("/resume")
async def upload_resume(
    resume: Optional[UploadFile] = File(None, description="Resume (PDF, DOC, DOCX or TXT)"),
    config: Config = Depends(get_config),
):
    """
    Upload a resume.

    Resumes are stored in their own folder (uploads/resumes). Send the URL
    you get back as resume_url with the application form.
    """
    if resume is None or not resume.filename:
        logger.warning("Upload rejected: No resume file provided")
        raise UploadRejected("No resume file provided. Please upload a PDF or Word document")

    if not is_resume_content_type(resume.content_type):
        logger.warning(f"Rejected resume upload: {resume.filename} ({resume.content_type or 'no mimetype'})")
        raise UploadRejected("Only PDF, Word or plain text resumes are allowed")

    stored_name = _unique_name("resume", resume.filename)
    size = await _save_upload(resume, config.resume_dir / stored_name, config.max_resume_size)

    logger.info(f"Resume upload successful: {resume.filename} -> resumes/{stored_name}")
    return {
        "success": True,
        "data": {
            "url": f"{UPLOAD_URL_PREFIX}resumes/{stored_name}",
            "filename": sanitize_filename(resume.filename),
            "size": size,
            "mimetype": resume.content_type,
        },
    }


@router.delete("/resume")
async def delete_resume(body: DeleteUploadRequest, config: Config = Depends(get_config)):
    """Delete an uploaded resume. Always answers success."""
    return _delete_upload(body.url, config.upload_dir, config.resume_dir)
