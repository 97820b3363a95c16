"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from pfe.schemas.feedback import FeedbackSuggestion


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def words(n: int, word: str = "word") -> str:
    """``n`` copies of ``word`` separated by single spaces."""
    return " ".join([word] * n)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def pirate_suggestion() -> FeedbackSuggestion:
    return FeedbackSuggestion(
        id="passive-voice-1",
        category="correctness",
        type="suggestion",
        title="Rewrite in active voice",
        description="Use active voice for clearer, more direct instructions",
        original_text="you are a pirate",
        suggested_text="You must act as a pirate",
    )


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "feedback-config.yml"
    cfg.write_text(
        """\
penalties:
  clarity: 25
min_words: 5
"""
    )
    return cfg


@pytest.fixture
def agent_file(tmp_path: Path) -> Path:
    """Write a valid agent definition YAML and return its path."""
    path = tmp_path / "agent.yml"
    path.write_text(
        """\
title: "Treasure Hunter"
description: "Finds buried treasure on the open web."
prompt: "Remember your role: you are a pirate captain. Find treasure."
tools:
  - exa_search
  - web_search
"""
    )
    return path


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FEEDBACK_CONFIG from leaking into tests."""
    monkeypatch.delenv("FEEDBACK_CONFIG", raising=False)
