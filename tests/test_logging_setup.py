"""Tests for logging helpers."""

import logging

import pytest

from moneytrack.logging_setup import _parse_level, get_logger


@pytest.mark.parametrize(
    "level,expected",
    [
        (logging.DEBUG, logging.DEBUG),
        ("info", logging.INFO),
        (" 30 ", 30),
        ("chatty", logging.WARNING),
    ],
)
def test_parse_level(level, expected):
    assert _parse_level(level) == expected


def test_parse_level_from_environment(monkeypatch):
    monkeypatch.setenv("MONEYTRACK_LOG_LEVEL", "ERROR")

    assert _parse_level(None) == logging.ERROR


def test_parse_level_default():
    assert _parse_level(None) == logging.WARNING


def test_get_logger_is_namespaced():
    logger = get_logger("moneytrack.tests")

    assert logger.name == "moneytrack.tests"
    assert logging.getLogger("moneytrack").handlers
