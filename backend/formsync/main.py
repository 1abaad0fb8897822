"""
Form Sync - Backend API
=======================
FastAPI application for the website's forms and uploads.

ARCHITECTURE:
    The website's forms (contact, job application, get started, resume
    upload, newsletter) post here. Every submission is saved in the
    submission store and then mirrored to a Google spreadsheet in the
    background, so the team can read submissions in Sheets.

    [Website] --HTTPS--> [This Backend] ---> [Submission Store (JSON file)]
                                |
                                | (background, best effort)
                                v
                      [Google Sheets API]  or  [Sync Backend /api/sync]

    If the spreadsheet is down or not configured, submitters still see
    success. Sync failures only show up in the logs.

HOW TO RUN:
    # Install dependencies
    python -m venv venv
    source venv/bin/activate  # Windows: venv\\Scripts\\activate
    pip install -e .

    # Configure (see formsync/config.py for every variable)
    export GOOGLE_SHEETS_ID=...
    export GOOGLE_SHEETS_API_KEY=...

    # Run the server
    cd backend
    uvicorn formsync.main:app --reload --port 8000

API DOCUMENTATION:
    After starting the server, visit:
    - Swagger UI: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc

Author: Form Sync Team
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from formsync.config import Config
from formsync.dependencies import AppServices, set_services
from formsync.routers import forms_router, sync_router, upload_router
from formsync.routers.upload import UploadRejected, upload_rejected_handler
from formsync.services import (
    BackgroundSyncRunner,
    DirectSheetClient,
    SheetsSyncService,
    SubmissionStore,
    create_sheet_client,
)


logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(message)s',
    datefmt='%H:%M:%S',
    handlers=[logging.StreamHandler(sys.stderr)]
)
# httpx logs full request URLs at INFO, and direct mode puts the API key in the query string
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

def build_lifespan(config: Config):
    """
    Application lifespan handler.

    STARTUP:
        1. Create the upload folders and open the submission store
        2. Create the Google Sheets clients (one shared HTTP client)
        3. Inject services into the routers
        4. Check the spreadsheet configuration
        5. Print startup information

    SHUTDOWN:
        1. Wait for background syncs that are still running
        2. Close the HTTP client
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ========== STARTUP ==========
        print("=" * 60)
        print("🚀 FORM SYNC - Starting Backend")
        print("=" * 60)

        config.resume_dir.mkdir(parents=True, exist_ok=True)
        store = SubmissionStore(config.submissions_db_file)

        http_client = httpx.AsyncClient(timeout=config.sheets.request_timeout)
        sheets_sync = SheetsSyncService(create_sheet_client(config.sheets, http_client))
        direct_sheets_sync = SheetsSyncService(DirectSheetClient(config.sheets, http_client))
        background = BackgroundSyncRunner()

        set_services(AppServices(
            config=config,
            store=store,
            sheets_sync=sheets_sync,
            direct_sheets_sync=direct_sheets_sync,
            background=background,
        ))

        sheets_ready = await sheets_sync.initialize_sheets()

        print(f"✅ Services initialized")
        print(f"   Google Sheets mode: {config.sheets.mode}")
        print(f"   Google Sheets ready: {'yes' if sheets_ready else 'no (submissions are still saved)'}")
        print(f"   Upload directory: {config.upload_dir}")
        print(f"   CORS origins: {len(config.cors_origins)} configured")
        print()
        print("📖 API Documentation: http://localhost:8000/docs")
        print("=" * 60)

        yield  # Application runs here

        # ========== SHUTDOWN ==========
        print()
        print("🛑 Shutting down...")
        if background.pending:
            logger.info(f"Waiting for {background.pending} background sync(s)")
        await background.drain()
        await http_client.aclose()
        set_services(None)
        print("✅ Shutdown complete")

    return lifespan


# =============================================================================
# CREATE FASTAPI APPLICATION
# =============================================================================

def create_app(config: Optional[Config] = None) -> FastAPI:
    config = config or Config.from_env()

    app = FastAPI(
        title="Form Sync API",
        description="""
## Overview

Backend API for the website's forms and file uploads.

## How It Works

1. **Submit a form** - POST to /api/forms/...
2. **It's saved** - The submission is stored right away
3. **It's mirrored** - In the background, a row is appended to the
   form's sheet in Google Sheets

## Forms

| Form | Endpoint | Sheet |
|------|----------|-------|
| Contact | POST /api/forms/contact | Contacts |
| Job Application | POST /api/forms/job-applications | Job Applications |
| Get Started | POST /api/forms/get-started | Get Started Requests |
| Resume Upload | POST /api/forms/resume-uploads | Resume Uploads |
| Newsletter | POST /api/forms/newsletter | Newsletter Subscribers |
        """,
        version="1.0.0",
        lifespan=build_lifespan(config),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(forms_router)
    app.include_router(sync_router)
    app.include_router(upload_router)
    app.add_exception_handler(UploadRejected, upload_rejected_handler)

    # Serve uploaded files (the directory is created at startup)
    app.mount(
        "/api/uploads",
        StaticFiles(directory=config.upload_dir, check_dir=False),
        name="uploads",
    )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", summary="API Information")
    async def root():
        """Root endpoint with API overview."""
        return {
            "name": "Form Sync API",
            "version": "1.0.0",
            "documentation": {
                "swagger": "/docs",
                "redoc": "/redoc",
                "openapi": "/openapi.json"
            },
            "endpoints": {
                "forms": {
                    "contact": "POST /api/forms/contact",
                    "job_applications": "POST /api/forms/job-applications",
                    "get_started": "POST /api/forms/get-started",
                    "resume_uploads": "POST /api/forms/resume-uploads",
                    "newsletter": "POST /api/forms/newsletter",
                    "list": "GET /api/forms/{form_type}"
                },
                "sync": {
                    "status": "GET /api/sync/status",
                    "sync": "POST /api/sync/{form_type}"
                },
                "upload": {
                    "image": "POST /api/upload/image",
                    "resume": "POST /api/upload/resume",
                    "delete_image": "DELETE /api/upload/image",
                    "delete_resume": "DELETE /api/upload/resume",
                    "files": "GET /api/uploads/{filename}"
                }
            }
        }

    @app.get("/health", summary="Health Check")
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "sheets_mode": config.sheets.mode,
            "sheets_configured": config.sheets.has_credentials,
        }

    @app.get("/api/ping")
    async def ping():
        return {"message": config.ping_message}

    return app


app = create_app()
