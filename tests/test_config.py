"""Tests for policy configuration."""

import pytest

from nosh.core.config import PolicyConfig


def test_defaults():
    policy = PolicyConfig()

    assert (policy.breakpoint_sprint, policy.breakpoint_weekend, policy.breakpoint_weekday) == (
        15,
        30,
        45,
    )
    assert policy.cooldown_dismissed_days == 14
    assert policy.cooldown_favourited_days == 3650
    assert policy.feed_batch_size == 30
    assert policy.recent_window_days == 14


def test_from_env(monkeypatch):
    monkeypatch.setenv("NOSH_FEED_BATCH_SIZE", "20")
    monkeypatch.setenv("NOSH_COOLDOWN_LOVED_DAYS", " 28 ")
    monkeypatch.delenv("NOSH_BREAKPOINT_SPRINT", raising=False)

    policy = PolicyConfig.from_env()

    assert policy.feed_batch_size == 20
    assert policy.cooldown_loved_days == 28
    assert policy.breakpoint_sprint == 15


def test_from_env_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("NOSH_RECENT_WINDOW_DAYS", "two weeks")
    with pytest.raises(ValueError, match="NOSH_RECENT_WINDOW_DAYS"):
        PolicyConfig.from_env()


def test_breakpoints_must_increase():
    with pytest.raises(ValueError, match="strictly increasing"):
        PolicyConfig(breakpoint_sprint=30, breakpoint_weekend=30)


def test_batch_size_positive():
    with pytest.raises(ValueError):
        PolicyConfig(feed_batch_size=0)
