"""
Tests for environment configuration and structured logging.

Usage:
    pytest tests/test_config.py -v
"""

import io
import json
import logging

import pytest

from feedback_insights.config import AnalyzerConfig, DatabaseConfig, get_env, get_env_bool
from feedback_insights.logging_config import JSONFormatter, setup_logging

SOFTSKILLS_VARS = (
    "SOFTSKILLS_TAXONOMY_PATH",
    "SOFTSKILLS_LEXICON_PATH",
    "SOFTSKILLS_CONTEXT_WINDOW",
    "SOFTSKILLS_TOP_N",
    "SOFTSKILLS_SENTIMENT_MERGE",
    "SOFTSKILLS_COMMENT_SOURCE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in SOFTSKILLS_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestAnalyzerConfig:

    def test_defaults(self, clean_env):
        config = AnalyzerConfig()
        assert config.taxonomy_path is None
        assert config.lexicon_path is None
        assert config.context_window == 50
        assert config.top_n == 3
        assert config.sentiment_merge == "pairwise"
        assert config.comment_source == "memory"

    def test_from_environment(self, clean_env):
        clean_env.setenv("SOFTSKILLS_CONTEXT_WINDOW", "20")
        clean_env.setenv("SOFTSKILLS_TOP_N", "5")
        clean_env.setenv("SOFTSKILLS_SENTIMENT_MERGE", "mean")
        config = AnalyzerConfig()
        assert (config.context_window, config.top_n, config.sentiment_merge) == (20, 5, "mean")

    def test_non_integer_rejected(self, clean_env):
        clean_env.setenv("SOFTSKILLS_TOP_N", "three")
        with pytest.raises(ValueError, match="SOFTSKILLS_TOP_N"):
            AnalyzerConfig()

    def test_invalid_merge_strategy(self, clean_env):
        clean_env.setenv("SOFTSKILLS_SENTIMENT_MERGE", "median")
        with pytest.raises(ValueError, match="SOFTSKILLS_SENTIMENT_MERGE"):
            AnalyzerConfig()

    def test_invalid_comment_source(self, clean_env):
        with pytest.raises(ValueError, match="SOFTSKILLS_COMMENT_SOURCE"):
            AnalyzerConfig(comment_source="redis")

    def test_negative_window(self, clean_env):
        with pytest.raises(ValueError):
            AnalyzerConfig(context_window=-1)


class TestEnvHelpers:

    def test_required_missing(self, monkeypatch):
        monkeypatch.delenv("FI_TEST_REQUIRED", raising=False)
        with pytest.raises(ValueError):
            get_env("FI_TEST_REQUIRED", required=True)

    @pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("off", False)])
    def test_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("FI_TEST_BOOL", raw)
        assert get_env_bool("FI_TEST_BOOL", not expected) is expected


class TestDatabaseConfig:

    def test_connection_params(self):
        config = DatabaseConfig(host="db", port=5433, name="fi", user="u", password="p")
        params = config.connection_params()
        assert params["host"] == "db"
        assert params["dbname"] == "fi"
        assert params["port"] == 5433

    def test_pool_bounds(self):
        with pytest.raises(ValueError):
            DatabaseConfig(pool_min_size=3, pool_max_size=2)


class TestLogging:

    def test_json_formatter_extra_fields(self):
        record = logging.LogRecord(
            name="feedback_insights.softskills.monthly_aggregator",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Analyzed %d comments",
            args=(3,),
            exc_info=None,
        )
        record.period = "mayo 2024"
        record.duration = 0.0123

        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"
        assert entry["msg"] == "Analyzed 3 comments"
        assert entry["period"] == "mayo 2024"
        assert entry["duration"] == 0.0123
        assert "skill" not in entry

    def test_non_ascii_kept(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "Comunicación", None, None)
        assert "Comunicación" in JSONFormatter().format(record)

    def test_setup_logging_to_stream(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        stream = io.StringIO()
        try:
            setup_logging("DEBUG", json_output=True, stream=stream)
            logging.getLogger("feedback_insights.test").info("hello", extra={"skill": "english"})
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert lines[-1]["msg"] == "hello"
        assert lines[-1]["skill"] == "english"
