"""Logging coverage to ensure problems are surfaced without stopping the run."""
import logging
from pathlib import Path

import order_parser.pipeline as pipeline
from order_parser.core.logging import configure_logging
from order_parser.processing.llm import AuthenticationError, GroqOrderClient


def test_pipeline_logs_summary(tmp_path: Path, chat_path: Path, caplog):
    """Running the pipeline should emit a helpful summary message."""

    caplog.set_level("INFO")

    pipeline.run_pipeline(chat_path, tmp_path / "output.csv")

    assert any("Wrote CSV output" in message for message in caplog.messages)
    assert any("using the fallback parser" in message for message in caplog.messages)
    assert any("orders need review" in message for message in caplog.messages)


def test_pipeline_logs_remote_failure_and_continues(tmp_path: Path, chat_path: Path, caplog, monkeypatch):
    """A failing remote parser should be logged and replaced by the fallback."""

    def refuse(self, text):
        raise AuthenticationError("Invalid API key. Please check your GROQ API key.")

    monkeypatch.setenv("ORDER_PARSER_AI_DISABLED", "0")
    monkeypatch.setenv("GROQ_API_KEY", "bad-key")
    monkeypatch.setattr(GroqOrderClient, "parse", refuse)
    caplog.set_level("WARNING")

    output = pipeline.run_pipeline(chat_path, tmp_path / "output.csv")

    assert output.exists()
    assert "Invalid API key" in caplog.text


def test_configure_logging_reads_env_level(monkeypatch):
    recorded = {}

    def fake_basic_config(**kwargs):
        recorded.update(kwargs)

    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    configure_logging()

    assert recorded["level"] == "DEBUG"
    assert "%(name)s" in recorded["format"]
