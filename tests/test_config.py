import logging

from holdem_equity.config import Settings
from holdem_equity.logging_config import configure_logging, get_logger


def test_defaults_without_environment():
    s = Settings.from_env({})
    assert s == Settings()
    assert s.cache_db == "equity_cache.db"
    assert s.hot_cache_size == 1000
    assert s.native_enabled is True


def test_reads_prefixed_variables():
    s = Settings.from_env({
        "HOLDEM_CACHE_DB": "/tmp/x.db",
        "HOLDEM_HOT_CACHE_SIZE": "5",
        "HOLDEM_NATIVE": "0",
        "HOLDEM_NATIVE_MIN_COMBOS": "10",
        "HOLDEM_LOG_LEVEL": "debug",
    })
    assert s.cache_db == "/tmp/x.db"
    assert s.hot_cache_size == 5
    assert s.native_enabled is False
    assert s.native_min_combos == 10
    assert s.log_level == "DEBUG"


def test_dotenv_file_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("HOLDEM_HOT_CACHE_SIZE=7\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    # register the variable with monkeypatch so whatever dotenv sets is undone
    monkeypatch.setenv("HOLDEM_HOT_CACHE_SIZE", "1")
    monkeypatch.delenv("HOLDEM_HOT_CACHE_SIZE")
    assert Settings.from_env().hot_cache_size == 7


def test_logging_setup(tmp_path):
    log_file = tmp_path / "logs" / "holdem.log"
    root = configure_logging("debug", str(log_file))
    try:
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        get_logger("holdem_equity.tests").debug("hello")
        for h in root.handlers:
            h.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        assert get_logger("other").name == "holdem_equity.other"
    finally:
        for h in list(root.handlers):
            h.close()
            root.removeHandler(h)
