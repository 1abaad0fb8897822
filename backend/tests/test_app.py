import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

from formsync.config import Config, SheetsConfig
from formsync.dependencies import get_direct_sheets_sync, get_sheets_sync
from formsync.main import create_app
from formsync.services import SheetsSyncService, StoreError, SubmissionStore
from formsync.services.sheet_client import SheetClient


class RecordingSheetClient(SheetClient):
    def __init__(self, configured=True):
        super().__init__(SheetsConfig())
        self.configured = configured
        self.calls = []

    async def is_configured(self):
        return self.configured

    async def _send(self, sheet_name, rows, fields):
        self.calls.append((sheet_name, rows, fields))
        return True


class ExplodingSyncService:
    async def sync_contact(self, contact):
        raise RuntimeError("spreadsheet exploded")


class BackendTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self.tmp.name)
        self.config = Config(
            sheets=SheetsConfig(spreadsheet_id="", api_key=""),
            upload_dir=self.tmp_path / "uploads",
            submissions_db_file=self.tmp_path / "submissions_db.json",
            ping_message="pong",
        )
        self.app = create_app(self.config)

    def tearDown(self):
        self.tmp.cleanup()


class FormsApiTests(BackendTestCase):
    def test_contact_is_stored_and_mirrored(self):
        sheet_client = RecordingSheetClient()
        self.app.dependency_overrides[get_sheets_sync] = lambda: SheetsSyncService(sheet_client)

        with TestClient(self.app) as client:
            response = client.post(
                "/api/forms/contact",
                json={
                    "name": "A",
                    "email": "a@x.com",
                    "message": "hi",
                    "created_at": "2024-01-01T00:00:00Z",
                },
            )
            self.assertEqual(response.status_code, 200)
            payload = response.json()
            self.assertTrue(payload["success"])
            self.assertEqual(payload["data"]["form_type"], "contact")
            self.assertEqual(payload["data"]["name"], "A")
            self.assertIn("id", payload["data"])

            listed = client.get("/api/forms/contact").json()
            self.assertEqual(listed["total"], 1)

        # Leaving the client runs shutdown, which waits for background syncs
        self.assertEqual(len(sheet_client.calls), 1)
        sheet_name, rows, _ = sheet_client.calls[0]
        self.assertEqual(sheet_name, "Contacts")
        self.assertEqual(rows, [["2024-01-01T00:00:00.000Z", "A", "a@x.com", "", "", "hi"]])

        stored = json.loads((self.tmp_path / "submissions_db.json").read_text(encoding="utf-8"))
        self.assertEqual(len(stored), 1)

    def test_submission_succeeds_when_sheets_not_configured(self):
        with TestClient(self.app) as client:
            response = client.post("/api/forms/newsletter", json={"email": "n@x.com"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

    def test_submission_succeeds_when_sync_raises(self):
        self.app.dependency_overrides[get_sheets_sync] = lambda: ExplodingSyncService()

        with self.assertLogs("formsync.services.background", level="ERROR") as logs:
            with TestClient(self.app) as client:
                response = client.post(
                    "/api/forms/contact",
                    json={"name": "A", "email": "a@x.com", "message": "hi"},
                )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        self.assertIn("spreadsheet exploded", " ".join(logs.output))

    def test_store_failure_is_an_error_and_skips_sync(self):
        sheet_client = RecordingSheetClient()
        self.app.dependency_overrides[get_sheets_sync] = lambda: SheetsSyncService(sheet_client)

        with patch.object(SubmissionStore, "save", side_effect=StoreError("disk full")):
            with TestClient(self.app) as client:
                response = client.post(
                    "/api/forms/get-started",
                    json={"first_name": "A", "last_name": "B", "email": "a@x.com"},
                )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(sheet_client.calls, [])

    def test_every_form_endpoint_accepts_its_payload(self):
        cases = [
            ("/api/forms/job-applications", {"full_name": "B", "email": "b@x.com", "phone": "1",
                                             "position": "P", "experience": "E"}),
            ("/api/forms/get-started", {"first_name": "C", "last_name": "D", "email": "c@x.com"}),
            ("/api/forms/resume-uploads", {"full_name": "E", "email": "e@x.com",
                                           "resume_url": "/api/uploads/resumes/resume-1-2.pdf"}),
            ("/api/forms/newsletter", {"email": "f@x.com"}),
        ]
        with TestClient(self.app) as client:
            for url, body in cases:
                with self.subTest(url=url):
                    response = client.post(url, json=body)
                    self.assertEqual(response.status_code, 200)

    def test_missing_required_field_is_rejected(self):
        with TestClient(self.app) as client:
            response = client.post("/api/forms/contact", json={"name": "A"})
        self.assertEqual(response.status_code, 422)

    def test_unknown_form_type_is_rejected(self):
        with TestClient(self.app) as client:
            response = client.get("/api/forms/blog-posts")
        self.assertEqual(response.status_code, 422)


class SyncApiTests(BackendTestCase):
    def test_status_reports_configuration(self):
        with TestClient(self.app) as client:
            response = client.get("/api/sync/status")
        self.assertEqual(response.json(), {"success": True, "data": {"configured": False}})

    def test_sync_endpoint_appends_row(self):
        sheet_client = RecordingSheetClient()
        self.app.dependency_overrides[get_direct_sheets_sync] = lambda: SheetsSyncService(sheet_client)

        with TestClient(self.app) as client:
            response = client.post(
                "/api/sync/newsletter",
                json={"email": "n@x.com", "subscribed_at": "2024-01-01T00:00:00Z"},
            )

        self.assertEqual(response.json(), {"success": True, "synced": True})
        self.assertEqual(
            sheet_client.calls[0][:2],
            ("Newsletter Subscribers", [["2024-01-01T00:00:00.000Z", "n@x.com"]]),
        )

    def test_sync_endpoint_not_configured_reports_not_synced(self):
        with TestClient(self.app) as client:
            response = client.post("/api/sync/contact", json={"name": "A", "email": "a@x.com", "message": "hi"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "synced": False})

    def test_sync_endpoint_rejects_invalid_payload(self):
        with TestClient(self.app) as client:
            response = client.post("/api/sync/job-application", json={"email": "a@x.com"})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertFalse(body["synced"])
        self.assertIn("error", body)


class RootApiTests(BackendTestCase):
    def test_ping_health_and_root(self):
        with TestClient(self.app) as client:
            self.assertEqual(client.get("/api/ping").json(), {"message": "pong"})

            health = client.get("/health").json()
            self.assertEqual(health["status"], "healthy")
            self.assertFalse(health["sheets_configured"])

            self.assertIn("endpoints", client.get("/").json())

    def test_upload_folders_are_created_at_startup_not_import(self):
        upload_dir = self.tmp_path / "fresh-uploads"
        app = create_app(Config(upload_dir=upload_dir, submissions_db_file=None))
        self.assertFalse(upload_dir.exists())

        with TestClient(app):
            self.assertTrue((upload_dir / "resumes").is_dir())

    def test_cors_preflight_allows_frontend(self):
        with TestClient(self.app) as client:
            response = client.options(
                "/api/forms/contact",
                headers={
                    "Origin": "http://localhost:5173",
                    "Access-Control-Request-Method": "POST",
                    "Access-Control-Request-Headers": "content-type",
                },
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.headers["access-control-allow-origin"], "http://localhost:5173"
        )


if __name__ == "__main__":
    unittest.main()
