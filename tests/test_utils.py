"""Tests for the alerters and the log file fallback."""

import logging

import pytest

import courtpairing.utils.logging as court_logging
from courtpairing.utils import Alerter, LoggingAlerter, RecordingAlerter


class TestAlerters:
    def test_alerter_is_abstract(self):
        with pytest.raises(TypeError):
            Alerter()

    def test_subclass_must_implement_alert(self):
        class Silent(Alerter):
            pass

        with pytest.raises(TypeError):
            Silent()

    def test_recording_alerter_keeps_alerts(self, alerter):
        alerter.alert("Invalid partnership", "p1 is unknown")
        assert alerter.alerts == [("Invalid partnership", "p1 is unknown")]

    def test_logging_alerter_logs_error(self, caplog):
        with caplog.at_level(logging.ERROR, logger="courtpairing.utils.alerts"):
            LoggingAlerter().alert("Title", "message")
        assert "Title: message" in caplog.text

    def test_both_alerters_are_alerters(self):
        assert isinstance(LoggingAlerter(), Alerter)
        assert isinstance(RecordingAlerter(), Alerter)


class TestFileHandler:
    @pytest.fixture
    def unresolved(self, monkeypatch):
        monkeypatch.setattr(court_logging, "_file_handler", None)
        monkeypatch.setattr(court_logging, "_file_handler_resolved", False)

    def test_broken_log_folder_warns(self, unresolved, monkeypatch, capsys):
        def broken():
            raise OSError("no app data")

        monkeypatch.setattr(court_logging, "_log_folder", broken)
        handler = court_logging._get_file_handler(
            logging.Formatter(court_logging.LOG_FMT)
        )
        assert handler is None
        out = capsys.readouterr().out
        assert "Warning" in out
        assert "no app data" in out

    def test_missing_log_folder_warns(self, unresolved, monkeypatch, capsys):
        monkeypatch.setattr(court_logging, "_log_folder", lambda: None)
        handler = court_logging._get_file_handler(
            logging.Formatter(court_logging.LOG_FMT)
        )
        assert handler is None
        assert "Could not determine writable location" in capsys.readouterr().out

    def test_file_handler_is_shared(self, unresolved, monkeypatch, tmp_path):
        monkeypatch.setattr(court_logging, "_log_folder", lambda: str(tmp_path))
        formatter = logging.Formatter(court_logging.LOG_FMT)
        first = court_logging._get_file_handler(formatter)
        assert first is not None
        try:
            assert court_logging._get_file_handler(formatter) is first
            assert (tmp_path / "logs").is_dir()
        finally:
            first.close()
