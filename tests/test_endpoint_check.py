import unittest
from unittest.mock import Mock, patch

import requests

from api_smoke.checks.endpoint import check_endpoint
from api_smoke.config import ApiTarget


class EndpointCheckTests(unittest.TestCase):
    def setUp(self) -> None:
        self.target = ApiTarget(host="localhost", port=3001, timeout_s=None)

    def test_json_body_is_parsed(self) -> None:
        response = Mock(status_code=200, text='{"success":true,"data":[{"title":"X"}]}')

        with patch("api_smoke.checks.endpoint.requests.get", return_value=response) as mock_get:
            res = check_endpoint(self.target, "/api/video-courses")

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.parsed)
        self.assertEqual(len(res.body["data"]), 1)
        self.assertEqual(res.body["data"][0]["title"], "X")
        self.assertIsNone(res.error)
        self.assertEqual(
            mock_get.call_args.args[0], "http://localhost:3001/api/video-courses"
        )
        self.assertIsNone(mock_get.call_args.kwargs["timeout"])

    def test_non_json_body_falls_back_to_raw_text(self) -> None:
        response = Mock(status_code=404, text="<html>Cannot GET /api/video-courses</html>")

        with patch("api_smoke.checks.endpoint.requests.get", return_value=response):
            res = check_endpoint(self.target, "/api/video-courses")

        self.assertEqual(res.status_code, 404)
        self.assertFalse(res.parsed)
        self.assertEqual(res.body, "<html>Cannot GET /api/video-courses</html>")

    def test_transport_error_is_reported_not_raised(self) -> None:
        with patch(
            "api_smoke.checks.endpoint.requests.get",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            res = check_endpoint(self.target, "/api/simulados")

        self.assertIsNone(res.status_code)
        self.assertIn("connection refused", res.error)
        self.assertIn("ConnectionError", res.error)


if __name__ == "__main__":
    unittest.main()
