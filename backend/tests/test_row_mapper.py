import unittest
from datetime import datetime, timedelta, timezone

from formsync.models import (
    ContactSubmission,
    FormType,
    GetStartedSubmission,
    JobApplicationSubmission,
    NewsletterSubscription,
    ResumeUploadSubmission,
)
from formsync.services.row_mapper import COLUMNS, map_to_row, normalize_timestamp


class NormalizeTimestampTests(unittest.TestCase):
    def test_utc_string_with_z(self):
        self.assertEqual(
            normalize_timestamp("2024-01-01T00:00:00Z"), "2024-01-01T00:00:00.000Z"
        )

    def test_offset_string_is_converted_to_utc(self):
        self.assertEqual(
            normalize_timestamp("2024-01-01T02:30:00+02:00"), "2024-01-01T00:30:00.000Z"
        )

    def test_milliseconds_are_kept_and_microseconds_dropped(self):
        value = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)
        self.assertEqual(normalize_timestamp(value), "2024-05-06T07:08:09.123Z")

    def test_naive_datetime_is_treated_as_utc(self):
        self.assertEqual(
            normalize_timestamp(datetime(2024, 1, 1, 12, 0, 0)), "2024-01-01T12:00:00.000Z"
        )

    def test_aware_datetime_in_other_zone(self):
        tz = timezone(timedelta(hours=-5))
        value = datetime(2023, 12, 31, 19, 0, 0, tzinfo=tz)
        self.assertEqual(normalize_timestamp(value), "2024-01-01T00:00:00.000Z")

    def test_epoch_milliseconds(self):
        self.assertEqual(normalize_timestamp(1704067200000), "2024-01-01T00:00:00.000Z")

    def test_unparseable_value_raises(self):
        with self.assertRaises(ValueError):
            normalize_timestamp("not a date")
        with self.assertRaises(ValueError):
            normalize_timestamp(None)


class MapToRowTests(unittest.TestCase):
    def test_contact_example(self):
        contact = ContactSubmission(
            name="A", email="a@x.com", message="hi", created_at="2024-01-01T00:00:00Z"
        )
        self.assertEqual(
            map_to_row(contact),
            ["2024-01-01T00:00:00.000Z", "A", "a@x.com", "", "", "hi"],
        )

    def test_job_application_layout(self):
        application = JobApplicationSubmission(
            full_name="Grace Hopper",
            email="grace@example.com",
            phone="555-0100",
            position="Engineer",
            experience="10 years",
            resume_url="/api/uploads/resumes/resume-1-2.pdf",
            created_at="2024-02-03T04:05:06.789Z",
        )
        self.assertEqual(
            map_to_row(application),
            [
                "2024-02-03T04:05:06.789Z",
                "Grace Hopper",
                "grace@example.com",
                "555-0100",
                "Engineer",
                "10 years",
                "",
                "/api/uploads/resumes/resume-1-2.pdf",
                "pending",
            ],
        )

    def test_get_started_layout(self):
        request = GetStartedSubmission(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            job_title="CTO",
            created_at="2024-01-01T00:00:00Z",
        )
        self.assertEqual(
            map_to_row(request),
            ["2024-01-01T00:00:00.000Z", "Ada", "Lovelace", "ada@example.com", "", "", "CTO", ""],
        )

    def test_resume_upload_with_only_required_fields(self):
        resume = ResumeUploadSubmission(
            full_name="Alan Turing", email="alan@example.com", created_at="2024-01-01T00:00:00Z"
        )
        row = map_to_row(resume)
        self.assertEqual(row[:3], ["2024-01-01T00:00:00.000Z", "Alan Turing", "alan@example.com"])
        self.assertEqual(row[3:], [""] * 9)

    def test_newsletter_uses_subscribed_at(self):
        subscription = NewsletterSubscription(
            email="news@example.com", subscribed_at="2024-03-01T10:00:00+01:00"
        )
        self.assertEqual(
            map_to_row(subscription), ["2024-03-01T09:00:00.000Z", "news@example.com"]
        )

    def test_row_length_matches_layout_for_every_form_type(self):
        submissions = [
            ContactSubmission(name="A", email="a@x.com", message="hi"),
            JobApplicationSubmission(
                full_name="B", email="b@x.com", phone="1", position="P", experience="E"
            ),
            GetStartedSubmission(first_name="C", last_name="D", email="c@x.com"),
            ResumeUploadSubmission(full_name="E", email="e@x.com"),
            NewsletterSubscription(email="f@x.com"),
        ]
        for submission in submissions:
            with self.subTest(form_type=submission.form_type):
                row = map_to_row(submission)
                self.assertEqual(len(row), len(COLUMNS[submission.form_type]))
                self.assertTrue(all(isinstance(cell, str) for cell in row))
                self.assertTrue(row[0].endswith("Z"))

    def test_layouts_start_with_timestamp(self):
        self.assertEqual(set(COLUMNS), set(FormType))
        for columns in COLUMNS.values():
            self.assertEqual(columns[0], "timestamp")


if __name__ == "__main__":
    unittest.main()
