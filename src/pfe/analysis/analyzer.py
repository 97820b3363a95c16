"""Prompt analyzer — runs the rule pipeline and scores the result."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from pfe.analysis.rules import RULES, Rule
from pfe.schemas.config import FeedbackConfig, Penalties
from pfe.schemas.feedback import FeedbackReport, FeedbackScore, FeedbackSuggestion

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = FeedbackConfig()


def compute_score(
    suggestions: Sequence[FeedbackSuggestion],
    penalties: Penalties | None = None,
) -> FeedbackScore:
    """Score each category as 100 minus its suggestion count times its penalty, floored at 0."""
    if penalties is None:
        penalties = _DEFAULT_CONFIG.penalties
    counts = Counter(s.category for s in suggestions)
    return FeedbackScore(
        correctness=max(0, 100 - counts["correctness"] * penalties.correctness),
        clarity=max(0, 100 - counts["clarity"] * penalties.clarity),
        engagement=max(0, 100 - counts["engagement"] * penalties.engagement),
        delivery=max(0, 100 - counts["delivery"] * penalties.delivery),
    )


def analyze(
    text: str,
    config: FeedbackConfig | None = None,
    *,
    rules: Sequence[Rule] = RULES,
) -> FeedbackReport:
    """Analyze a prompt and return its score together with the suggestions behind it.

    Every call reruns the full pipeline; nothing is cached between calls.
    """
    if config is None:
        config = _DEFAULT_CONFIG

    suggestions: list[FeedbackSuggestion] = []
    for rule in rules:
        suggestions.extend(rule.check(text, config))

    score = compute_score(suggestions, config.penalties)
    logger.debug(
        "Analyzed %d chars: %d suggestion(s), overall %d",
        len(text), len(suggestions), score.overall,
    )
    return FeedbackReport(score=score, suggestions=suggestions)
