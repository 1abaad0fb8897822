"""
Submission Store
================

The primary store for form submissions.

Submissions are kept in memory and saved to a JSON file
(submissions_db.json) so they survive restarts:
- Save a submission = written to file right away
- Restart server = submissions are loaded back automatically

Unlike the spreadsheet mirror, saving here is NOT best effort: if the file
can't be written, save() raises StoreError and the submitter gets an error.

Author: Form Sync Team
"""

import json
import logging
import shutil
import uuid
from pathlib import Path
from typing import Optional

from formsync.models import FormSubmission, FormType

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a submission could not be stored."""


class SubmissionStore:
    """
    Stores form submissions, grouped by form type.

    Records look like:
        {
            "id": "3f1c...",
            "form_type": "contact",
            "name": "Ada",
            "email": "ada@example.com",
            ...
            "created_at": "2024-01-01T00:00:00Z"
        }
    """

    def __init__(self, db_file: Optional[Path] = None):
        """
        Args:
            db_file: JSON file to persist to. None = memory only.
        """
        self.db_file = Path(db_file) if db_file else None
        self._records: dict[str, dict] = {}
        self._load_from_file()

    # =========================================================================
    # DATABASE PERSISTENCE
    # =========================================================================

    def _load_from_file(self):
        """Load submissions from the JSON file."""
        if self.db_file is None:
            return
        if not self.db_file.exists():
            logger.info(f"No existing submissions database found at {self.db_file}")
            return

        try:
            with open(self.db_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")

            for record_id, record in data.items():
                try:
                    FormType(record["form_type"])
                    self._records[record_id] = record
                except (ValueError, KeyError, TypeError) as e:
                    logger.error(f"Error loading submission {record_id}: {e}, skipping")
                    continue

            logger.info(f"Loaded {len(self._records)} submissions from database")
        except ValueError as e:
            logger.error(f"Error parsing submissions database JSON: {e}")
            backup_path = self.db_file.with_suffix(".json.backup")
            try:
                shutil.copy2(self.db_file, backup_path)
                logger.warning(f"Corrupted database backed up to {backup_path}")
            except OSError as backup_err:
                logger.error(f"Failed to backup corrupted database: {backup_err}")
        except Exception as e:
            logger.error(f"Error loading submissions database: {e}", exc_info=True)

    def _save_to_file(self):
        """Save submissions to the JSON file (atomic write)."""
        if self.db_file is None:
            return

        self.db_file.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.db_file.with_suffix(".json.tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(self._records, f, indent=2, ensure_ascii=False)
        except OSError:
            temp_file.unlink(missing_ok=True)
            raise
        temp_file.replace(self.db_file)
        logger.debug(f"Saved {len(self._records)} submissions to database")

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def save(self, submission: FormSubmission) -> dict:
        """
        Store a submission and return the stored record.

        Raises:
            StoreError: if the database file could not be written
        """
        record_id = str(uuid.uuid4())
        record = {
            "id": record_id,
            "form_type": submission.form_type.value,
            **submission.model_dump(mode="json"),
        }

        self._records[record_id] = record
        try:
            self._save_to_file()
        except OSError as e:
            del self._records[record_id]
            logger.error(f"Error saving submissions database: {e}")
            raise StoreError(f"Could not store {submission.form_type.value} submission") from e

        logger.info(f"[{submission.form_type.value}] Stored submission {record_id}")
        return record

    def get(self, record_id: str) -> Optional[dict]:
        return self._records.get(record_id)

    def list_records(self, form_type: Optional[FormType] = None) -> list[dict]:
        """All stored records, optionally only one form type."""
        if form_type is None:
            return list(self._records.values())
        return [r for r in self._records.values() if r["form_type"] == form_type.value]

    def reset(self):
        """Forget everything (tests)."""
        self._records.clear()
        self._save_to_file()
