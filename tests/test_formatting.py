import unittest

from api_smoke.checks.results import EndpointCheckResult
from api_smoke.formatting import PREVIEW_CHARS, format_result, preview
from api_smoke.models import SmokeCheck


class FormattingTests(unittest.TestCase):
    def test_success_envelope_reports_count_and_titles(self) -> None:
        check = SmokeCheck(id="video-courses", path="/api/video-courses", label="Courses")
        res = EndpointCheckResult(
            path="/api/video-courses",
            status_code=200,
            body={"success": True, "data": [{"title": "X"}]},
            parsed=True,
        )

        lines = format_result(check, res)

        self.assertEqual(
            lines,
            [
                "Courses: GET /api/video-courses",
                "Status: 200",
                "Success: True",
                "Courses found: 1",
                "  1. X",
            ],
        )

    def test_show_items_bounds_titles(self) -> None:
        check = SmokeCheck(id="simulados", path="/api/simulados", show_items=2)
        res = EndpointCheckResult(
            path="/api/simulados",
            status_code=200,
            body={"success": True, "data": [{"title": t} for t in "abcd"]},
            parsed=True,
        )

        lines = format_result(check, res)

        self.assertIn("simulados found: 4", lines)
        self.assertIn("  2. b", lines)
        self.assertNotIn("  3. c", lines)

    def test_failed_envelope_shows_error(self) -> None:
        check = SmokeCheck(id="simulados", path="/api/simulados")
        res = EndpointCheckResult(
            path="/api/simulados",
            status_code=500,
            body={"success": False, "error": "relation does not exist"},
            parsed=True,
        )

        lines = format_result(check, res)

        self.assertIn("Success: False", lines)
        self.assertIn("simulados found: 0", lines)
        self.assertIn("Error: relation does not exist", lines)

    def test_raw_body_gets_bounded_preview(self) -> None:
        check = SmokeCheck(id="video-courses", path="/api/video-courses")
        body = "x" * (PREVIEW_CHARS + 50)
        res = EndpointCheckResult(path="/api/video-courses", status_code=502, body=body)

        lines = format_result(check, res)

        self.assertEqual(lines[-1], f"Response: {'x' * PREVIEW_CHARS}...")

    def test_raw_expectation_previews_json(self) -> None:
        check = SmokeCheck(id="health", path="/api/health", expect="raw")
        res = EndpointCheckResult(
            path="/api/health", status_code=200, body={"status": "ok"}, parsed=True
        )

        lines = format_result(check, res)

        self.assertEqual(lines[-1], 'Response: {"status": "ok"}')

    def test_transport_error(self) -> None:
        check = SmokeCheck(id="health", path="/api/health")
        res = EndpointCheckResult(
            path="/api/health", status_code=None, error="ConnectionError: refused"
        )

        self.assertEqual(
            format_result(check, res),
            ["health: GET /api/health", "Error: ConnectionError: refused"],
        )

    def test_preview_keeps_short_text(self) -> None:
        self.assertEqual(preview("short"), "short")


if __name__ == "__main__":
    unittest.main()
