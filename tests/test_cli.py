import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from whatsup import cli
from whatsup.checks.ping_check import UnsupportedPlatformError


def _write_config(td: str, **overrides) -> str:
    data = {
        "teamsWebhookUrlSuccess": "https://teams.local/ok",
        "teamsWebhookUrlFailure": "https://teams.local/fail",
        "endpoints": ["a.test", "b.test"],
        "tries": 2,
        "https": True,
    }
    data.update(overrides)
    path = Path(td) / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    # keep basicConfig from binding a handler to the redirected stream
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err), patch(
        "whatsup.cli.logging.basicConfig"
    ):
        code = cli.main(argv)
    return code, out.getvalue(), err.getvalue()


class CliTests(unittest.TestCase):
    def test_check_prints_summary_and_count(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td)
            with patch(
                "whatsup.checks.http_check.requests.get", return_value=Mock(status_code=200)
            ), patch(
                "whatsup.notifier.requests.post", return_value=Mock(status_code=200)
            ) as mock_post:
                code, out, _ = _run(["check", "--config", path])

        self.assertEqual(code, 0)
        self.assertIn("All 2 endpoints are up.", out)
        self.assertIn("Checked 2 endpoints.", out)
        self.assertEqual(mock_post.call_args.args[0], "https://teams.local/ok")

    def test_no_notify_skips_webhook(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td)
            with patch(
                "whatsup.checks.http_check.requests.get", return_value=Mock(status_code=200)
            ), patch("whatsup.notifier.requests.post") as mock_post:
                code, _, _ = _run(["check", "--config", path, "--no-notify"])

        self.assertEqual(code, 0)
        mock_post.assert_not_called()

    def test_delivery_failure_exits_nonzero_after_printing_summary(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td)
            with patch(
                "whatsup.checks.http_check.requests.get", return_value=Mock(status_code=500)
            ), patch("whatsup.notifier.requests.post", return_value=Mock(status_code=500)):
                code, out, err = _run(["check", "--config", path])

        self.assertEqual(code, 1)
        self.assertIn("**2 endpoints are down!**", out)
        self.assertIn("error sending message", err)

    def test_missing_config_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, _, err = _run(["check", "--config", str(Path(td) / "missing.json")])

        self.assertEqual(code, 1)
        self.assertIn("Error reading config", err)

    def test_unsupported_platform_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td, https=False)
            with patch(
                "whatsup.checks.probes.detect_host_os",
                side_effect=UnsupportedPlatformError("untested OS: plan9"),
            ), patch("whatsup.notifier.requests.post") as mock_post:
                code, _, err = _run(["check", "--config", path])

        self.assertEqual(code, 1)
        self.assertIn("untested OS: plan9", err)
        mock_post.assert_not_called()

    def test_overrides_tries_and_probe(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td, https=False, tries=5)
            with patch(
                "whatsup.checks.http_check.requests.get", return_value=Mock(status_code=403)
            ) as mock_get:
                code, _, _ = _run(
                    ["check", "--config", path, "--https", "--tries", "1", "--no-notify"]
                )

        self.assertEqual(code, 0)
        self.assertEqual(mock_get.call_count, 2)

    def test_negative_tries_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td)
            code, _, err = _run(["check", "--config", path, "--tries", "-1"])

        self.assertEqual(code, 1)
        self.assertIn("non-negative", err)

    def test_invalid_environment_settings_exit_nonzero(self) -> None:
        cases = [
            ("WHATSUP_MAX_WORKERS", -1, "max workers"),
            ("WHATSUP_TIMEOUT_SECONDS", 0, "timeout must be positive"),
            ("WHATSUP_TIMEOUT_SECONDS", -3, "timeout must be positive"),
            ("WHATSUP_WEBHOOK_TIMEOUT_SECONDS", 0, "webhook timeout"),
        ]
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td)
            for name, value, expected in cases:
                with self.subTest(name=name, value=value):
                    with patch.object(cli.settings, name, value), patch(
                        "whatsup.checks.http_check.requests.get"
                    ) as mock_get, patch("whatsup.notifier.requests.post") as mock_post:
                        code, _, err = _run(["check", "--config", path])

                    self.assertEqual(code, 1)
                    self.assertIn("Error checking endpoints", err)
                    self.assertIn(expected, err)
                    mock_get.assert_not_called()
                    mock_post.assert_not_called()

    def test_bare_invocation_runs_check(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write_config(td)
            with patch.object(cli.settings, "WHATSUP_CONFIG_PATH", path), patch(
                "whatsup.checks.http_check.requests.get", return_value=Mock(status_code=200)
            ), patch("whatsup.notifier.requests.post", return_value=Mock(status_code=200)):
                code, out, _ = _run([])

        self.assertEqual(code, 0)
        self.assertIn("Checked 2 endpoints.", out)

    def test_serve_runs_uvicorn(self) -> None:
        with patch("whatsup.cli.uvicorn.run") as mock_run:
            code, _, _ = _run(["serve", "--host", "0.0.0.0", "--port", "9000"])

        self.assertEqual(code, 0)
        mock_run.assert_called_once_with(
            "whatsup.api:app", host="0.0.0.0", port=9000, log_level="info"
        )


if __name__ == "__main__":
    unittest.main()
