import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from api_smoke import cli
from api_smoke.checks.results import CheckResult


class CliTests(unittest.TestCase):
    def test_ensure_exit_codes(self) -> None:
        for ok, code in ((True, 0), (False, 1)):
            with self.subTest(ok=ok):
                with patch("api_smoke.cli.ensure_running", return_value=ok) as mock_ensure:
                    self.assertEqual(cli.main(["ensure"]), code)
                mock_ensure.assert_called_once()

    def test_ensure_main_is_ensure_command(self) -> None:
        with patch("api_smoke.cli.ensure_running", return_value=False):
            self.assertEqual(cli.ensure_main(), 1)

    def test_smoke_exit_zero_even_when_endpoints_fail(self) -> None:
        with patch("api_smoke.cli.run_suite", return_value=[]) as mock_run:
            self.assertEqual(cli.main(["smoke", "simulados"]), 0)

        suite = mock_run.call_args.args[1]
        self.assertEqual(suite.name, "simulados")
        self.assertFalse(mock_run.call_args.kwargs["ensure"])

    def test_smoke_with_ensure_flag(self) -> None:
        with patch("api_smoke.cli.run_suite", return_value=[]) as mock_run:
            cli.main(["smoke", "quick", "--ensure"])

        self.assertTrue(mock_run.call_args.kwargs["ensure"])

    def test_unknown_suite_exits_2(self) -> None:
        with patch("api_smoke.cli.run_suite") as mock_run, self.assertLogs(
            "api_smoke.cli", level="ERROR"
        ):
            self.assertEqual(cli.main(["smoke", "nope"]), 2)
        mock_run.assert_not_called()

    def test_invalid_checks_file_exits_2(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "bad.yml"
            path.write_text("suites:\n  - name: x\n    checks: []\n")
            with self.assertLogs("api_smoke.cli", level="ERROR"):
                self.assertEqual(cli.main(["--checks-file", str(path), "suites"]), 2)

    def test_suites_lists_bundled_suites(self) -> None:
        with patch("builtins.print") as mock_print:
            self.assertEqual(cli.main(["suites"]), 0)

        printed = " ".join(c.args[0] for c in mock_print.call_args_list)
        self.assertIn("video-courses", printed)
        self.assertIn("/api/simulados", printed)

    def test_db_exit_codes(self) -> None:
        for ok, code in ((True, 0), (False, 1)):
            with self.subTest(ok=ok):
                with patch(
                    "api_smoke.cli.check_database",
                    return_value=CheckResult(ok=ok, latency_ms=1),
                ):
                    self.assertEqual(cli.main(["db"]), code)

    def test_stub_serves_on_requested_port(self) -> None:
        with patch("api_smoke.stub_server.serve") as mock_serve:
            self.assertEqual(cli.main(["stub", "--port", "3002"]), 0)

        mock_serve.assert_called_once_with(host="127.0.0.1", port=3002)

    def test_import_leaves_web_stack_unloaded(self) -> None:
        root = Path(__file__).resolve().parents[1]
        env = dict(os.environ, PYTHONPATH=str(root))
        out = subprocess.run(
            [
                sys.executable,
                "-c",
                "import sys, api_smoke.cli; "
                "print('api_smoke.stub_server' in sys.modules, 'fastapi' in sys.modules)",
            ],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )

        self.assertEqual(out.stdout.strip(), "False False")


if __name__ == "__main__":
    unittest.main()
