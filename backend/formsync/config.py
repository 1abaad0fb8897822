"""
Configuration
=============
Application configuration loaded from environment variables.

The configuration is read ONCE at startup (Config.from_env()) and then passed
to whatever needs it. Nothing else in the app reads os.environ directly, so
tests can build a Config with whatever values they like.

Environment Variables:
    GOOGLE_SHEETS_ID: Spreadsheet to mirror form submissions to
    GOOGLE_SHEETS_API_KEY: Access key for the Google Sheets API
    GOOGLE_SHEETS_MODE: "direct" (call Google) or "proxy" (call a sync backend)
    GOOGLE_SHEETS_API_BASE: Base URL of the Sheets API (direct mode)
    GOOGLE_SHEETS_PROXY_URL: Base URL of the sync backend (proxy mode)
    SHEETS_REQUEST_TIMEOUT: Seconds to wait for the spreadsheet (default: 30)
    UPLOAD_DIR: Where uploaded images and resumes are stored
    MAX_IMAGE_SIZE: Largest accepted image, in bytes (default: 5 MB)
    MAX_RESUME_SIZE: Largest accepted resume, in bytes (default: 10 MB)
    SUBMISSIONS_DB_FILE: JSON file the form submissions are saved to
    FRONTEND_URL: URL of the frontend for CORS
    PING_MESSAGE: Reply of GET /api/ping

Author: Form Sync Team
"""

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
DEFAULT_PROXY_URL = "http://localhost:8000/api/sync"

MB = 1024 * 1024


class SheetsConfig(BaseModel):
    """
    Where the spreadsheet mirror lives and how we talk to it.

    Fields:
        spreadsheet_id: Google spreadsheet ID (empty = not configured)
        api_key: Google API key (empty = not configured)
        mode: "direct" calls the Sheets API, "proxy" calls our own /api/sync
        api_base: Sheets API base URL (direct mode)
        proxy_url: Sync backend base URL (proxy mode)
        request_timeout: Seconds before a spreadsheet call gives up
    """
    model_config = ConfigDict(frozen=True)

    spreadsheet_id: str = ""
    api_key: str = ""
    mode: Literal["direct", "proxy"] = "direct"
    api_base: str = DEFAULT_SHEETS_API_BASE
    proxy_url: str = DEFAULT_PROXY_URL
    request_timeout: float = 30.0

    @property
    def has_credentials(self) -> bool:
        """True when both the spreadsheet ID and the API key are set."""
        return bool(self.spreadsheet_id.strip() and self.api_key.strip())

    @classmethod
    def from_env(cls) -> "SheetsConfig":
        mode = os.getenv("GOOGLE_SHEETS_MODE", "direct").strip().lower()
        return cls(
            spreadsheet_id=os.getenv("GOOGLE_SHEETS_ID", ""),
            api_key=os.getenv("GOOGLE_SHEETS_API_KEY", ""),
            mode="proxy" if mode == "proxy" else "direct",
            api_base=os.getenv("GOOGLE_SHEETS_API_BASE", DEFAULT_SHEETS_API_BASE),
            proxy_url=os.getenv("GOOGLE_SHEETS_PROXY_URL", DEFAULT_PROXY_URL),
            request_timeout=float(os.getenv("SHEETS_REQUEST_TIMEOUT", "30")),
        )


class Config(BaseModel):
    """
    Everything the app needs to start.

    Defaults are set for local development.
    """
    model_config = ConfigDict(frozen=True)

    sheets: SheetsConfig = Field(default_factory=SheetsConfig)

    # Uploads
    upload_dir: Path = Path("uploads")
    max_image_size: int = 5 * MB
    max_resume_size: int = 10 * MB

    # Primary store. None keeps submissions in memory only.
    submissions_db_file: Optional[Path] = Path("submissions_db.json")

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:5173"

    ping_message: str = "ping"

    @property
    def resume_dir(self) -> Path:
        return self.upload_dir / "resumes"

    @property
    def cors_origins(self) -> list[str]:
        origins = [
            self.frontend_url,
            "http://localhost:5173",    # Vite dev server
            "http://localhost:3000",    # Create React App
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000",
        ]
        # Keep order, drop duplicates
        return list(dict.fromkeys(origins))

    @classmethod
    def from_env(cls) -> "Config":
        """Load .env (if any) and build the config from the environment."""
        load_dotenv()

        db_file = os.getenv("SUBMISSIONS_DB_FILE", "submissions_db.json")
        return cls(
            sheets=SheetsConfig.from_env(),
            upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
            max_image_size=int(os.getenv("MAX_IMAGE_SIZE", str(5 * MB))),
            max_resume_size=int(os.getenv("MAX_RESUME_SIZE", str(10 * MB))),
            submissions_db_file=Path(db_file) if db_file else None,
            frontend_url=os.getenv("FRONTEND_URL", "http://localhost:5173"),
            ping_message=os.getenv("PING_MESSAGE", "ping"),
        )
