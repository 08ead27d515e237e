"""Tests for process setup."""

import logging

from grille import main
from grille.config import settings
from grille.engine.registry import get_registry


def test_register_generators_is_idempotent():
    before = get_registry().count
    main.register_generators()
    main.register_generators()
    assert get_registry().count == before == 9


def test_configure_logging_explicit_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    main.configure_logging("debug")
    assert calls[0]["level"] == logging.DEBUG
    assert "%(name)s" in calls[0]["format"]


def test_configure_logging_uses_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    monkeypatch.setattr(settings, "grille_log_level", "info")
    main.configure_logging()
    assert calls[0]["level"] == logging.INFO


def test_configure_logging_unknown_level_falls_back(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    main.configure_logging("chatty")
    assert calls[0]["level"] == logging.WARNING
