"""Unit tests for logging configuration."""

import json
from pathlib import Path

import pytest
from loguru import logger

from civiclens_api.core.logging import setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_case_insensitive(self) -> None:
        setup_logging("info")
        setup_logging("DEBUG")

    def test_file_sink_created(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        setup_logging("INFO", log_dir=str(log_dir))
        logger.info("hello from the test suite")
        logger.remove()
        assert (log_dir / "civiclens-api.log").read_text(encoding="utf-8").count("hello from the test suite") == 1
        setup_logging("INFO")

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            setup_logging("chatty")

    def test_json_output_records_serialized(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("INFO")
        logger.bind(json_output=True).info("structured event")
        logger.info("plain event")
        err_lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        setup_logging("INFO")

        structured = [json.loads(line) for line in err_lines if line.startswith("{")]
        assert [entry["record"]["message"] for entry in structured] == ["structured event"]
        assert any(line.endswith("plain event") for line in err_lines)
