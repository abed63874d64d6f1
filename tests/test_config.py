"""Tests for configuration loading."""

import importlib

from school_erp import config


def test_server_settings_from_environment(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "8081")
    monkeypatch.setenv("FLASK_DEBUG", "1")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.Config.HOST == "127.0.0.1"
        assert reloaded.Config.PORT == 8081
        assert reloaded.Config.DEBUG is True
    finally:
        monkeypatch.undo()
        importlib.reload(config)
