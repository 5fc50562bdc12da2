"""Tests for the psi-report command line."""

import json
import logging
from unittest.mock import AsyncMock, patch

import pytest
from psi_report.cli import EXIT_ERROR, EXIT_OK, EXIT_THRESHOLD_FAILED, main


@pytest.fixture
def payload_file(tmp_path, raw_payload):
    path = tmp_path / "response.json"
    path.write_text(json.dumps(raw_payload), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def clean_env():
    with patch.dict("os.environ", {}, clear=True):
        yield


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestMain:
    """Test cases for the CLI entry point."""

    def test_renders_saved_response(self, payload_file, capsys):
        exit_code = main(["https://example.com/page/", "--input", str(payload_file), "--format", "json"])

        captured = capsys.readouterr()
        assert exit_code == EXIT_OK
        assert json.loads(captured.out)["overview"]["URL"] == "example.com/page"

    def test_threshold_failure(self, payload_file, capsys):
        exit_code = main(["https://example.com/page/", "--input", str(payload_file), "--threshold", "90"])

        captured = capsys.readouterr()
        assert exit_code == EXIT_THRESHOLD_FAILED
        assert "Summary" in captured.out
        assert "Threshold of 90 not met with score of 87" in captured.err
        assert "Traceback" not in captured.err

    def test_invalid_payload(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"id": "https://example.com/"}), encoding="utf-8")

        exit_code = main(["https://example.com/", "--input", str(path)])

        assert exit_code == EXIT_ERROR
        assert "Invalid audit payload" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        exit_code = main(["https://example.com/", "--input", str(tmp_path / "nope.json")])
        assert exit_code == EXIT_ERROR

    def test_fetches_from_api(self, raw_payload, capsys):
        with patch("psi_report.cli.PageSpeedInsightsAPI") as mock_api_class:
            mock_api_class.return_value.fetch = AsyncMock(return_value=raw_payload)
            exit_code = main(["https://example.com/page/", "--strategy", "desktop", "--key", "k"])

        assert exit_code == EXIT_OK
        mock_api_class.assert_called_once_with(api_key="k", strategy="desktop", locale="en")
        assert "desktop" in capsys.readouterr().out

    def test_writes_files(self, payload_file, tmp_path, capsys):
        out_dir = tmp_path / "reports"
        out_dir.mkdir()

        exit_code = main([
            "https://example.com/page/",
            "--input", str(payload_file),
            "--format", "json",
            "--to-file",
            "--file-path", str(out_dir),
        ])

        assert exit_code == EXIT_OK
        assert len(list(out_dir.glob("*_short.json"))) == 1
        assert len(list(out_dir.glob("*_full.json"))) == 1

    def test_invalid_env_threshold(self, capsys):
        with patch.dict("os.environ", {"PSI_THRESHOLD": "abc"}):
            exit_code = main(["https://example.com/"])
        assert exit_code == EXIT_ERROR

    def test_links_fall_back_to_plain_when_not_a_tty(self, payload_file, capsys):
        exit_code = main(["https://example.com/page/", "--input", str(payload_file), "--links"])

        out = capsys.readouterr().out
        assert exit_code == EXIT_OK
        assert "\x1b]8;;" not in out
        assert "Eliminate render-blocking resources (https://web.dev/render-blocking-resources/)" in out

    def test_links_hyperlinks_forced_by_env(self, payload_file, capsys):
        with patch.dict("os.environ", {"PSI_HYPERLINKS": "1"}):
            main(["https://example.com/page/", "--input", str(payload_file), "--links"])

        assert "\x1b]8;;https://web.dev/render-blocking-resources/\x07" in capsys.readouterr().out

    def test_logs_api_stats_after_fetch(self, raw_payload, caplog):
        with patch("psi_report.cli.PageSpeedInsightsAPI") as mock_api_class:
            client = mock_api_class.return_value
            client.fetch = AsyncMock(return_value=raw_payload)
            client.get_stats.return_value = {"total_requests": 1, "failed_requests": 0}

            with patch("psi_report.cli.setup_logging"), caplog.at_level(logging.DEBUG, logger="psi_report.cli"):
                exit_code = main(["https://example.com/page/"])

        assert exit_code == EXIT_OK
        client.get_stats.assert_called_once_with()
        assert "'total_requests': 1" in caplog.text
