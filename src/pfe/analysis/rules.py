"""Prompt checks — each rule inspects the whole text and returns its own suggestions.

Rules are plain functions ``(text, config) -> list[FeedbackSuggestion]``.
They share no state and are composed by concatenation in ``RULES`` order,
which is also the order suggestions are reported in.
"""

from __future__ import annotations

import re
from typing import Callable, NamedTuple

from pfe.schemas.config import FeedbackConfig
from pfe.schemas.feedback import FeedbackSuggestion

RuleFn = Callable[[str, FeedbackConfig], list[FeedbackSuggestion]]

_YOU_ARE_CLAUSE = re.compile(r"you are a ([^.]+)", re.IGNORECASE)
_SENTENCE_BREAK = re.compile(r"[.!?]+")
_ABSOLUTE_WORDS = ("never", "always", "must")


class Rule(NamedTuple):
    """A rule function tagged with the score category it penalizes."""

    name: str
    category: str
    check: RuleFn


# ── Correctness ──────────────────────────────────────────────


def check_passive_voice(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    """Offer an active-voice rewrite of a "you are a ..." role clause."""
    if "your" not in text or "you are" not in text:
        return []
    match = _YOU_ARE_CLAUSE.search(text)
    if not match:
        return []
    clause = match.group(0)
    return [
        FeedbackSuggestion(
            id="passive-voice-1",
            category="correctness",
            type="suggestion",
            title="Rewrite in active voice",
            description="Use active voice for clearer, more direct instructions",
            original_text=clause,
            # Case-sensitive: a "You are a" match is proposed unchanged.
            suggested_text=clause.replace("you are", "You must act as", 1),
        )
    ]


def check_punctuation(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    """Flag sentences that don't end with a period.

    The split consumes every terminator, so any non-final segment is
    reported. Ids carry the segment index.
    """
    sentences = _SENTENCE_BREAK.split(text)
    suggestions: list[FeedbackSuggestion] = []
    for idx, sentence in enumerate(sentences[:-1]):
        trimmed = sentence.strip()
        if trimmed and not trimmed.endswith("."):
            suggestions.append(
                FeedbackSuggestion(
                    id=f"punctuation-{idx}",
                    category="correctness",
                    type="error",
                    title="Punctuation problem",
                    description="Missing period at end of sentence",
                    original_text=trimmed,
                )
            )
    return suggestions


# ── Clarity ──────────────────────────────────────────────────


def check_too_short(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    # Counts single-space separated pieces, so runs of spaces add to the count.
    if not text or len(text.split(" ")) >= config.min_words:
        return []
    return [
        FeedbackSuggestion(
            id="too-short",
            category="clarity",
            type="warning",
            title="Instructions too brief",
            description="Add more context and specific requirements for better results",
        )
    ]


def check_vague_language(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    if "etc" not in text and "..." not in text:
        return []
    return [
        FeedbackSuggestion(
            id="vague-language",
            category="clarity",
            type="warning",
            title="Avoid vague language",
            description='Be specific instead of using "etc" or "..." - list out exact requirements',
        )
    ]


# ── Engagement ───────────────────────────────────────────────


def check_examples(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    lowered = text.lower()
    has_examples = "example" in lowered or "for instance" in lowered
    if has_examples or len(text) <= config.examples_min_length:
        return []
    return [
        FeedbackSuggestion(
            id="add-examples",
            category="engagement",
            type="suggestion",
            title="Include examples",
            description="Add concrete examples to help the agent understand expected outputs",
        )
    ]


def check_structure(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    lowered = text.lower()
    if "step" in lowered or "first" in lowered or len(text) <= config.structure_min_length:
        return []
    return [
        FeedbackSuggestion(
            id="add-structure",
            category="engagement",
            type="suggestion",
            title="Add step-by-step structure",
            description="Break down instructions into numbered steps for clarity",
        )
    ]


# ── Delivery ─────────────────────────────────────────────────


def check_too_long(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    word_count = len(text.split())
    if word_count <= config.max_words:
        return []
    return [
        FeedbackSuggestion(
            id="too-long",
            category="delivery",
            type="warning",
            title="Instructions too lengthy",
            description=(
                "Consider condensing to focus on key requirements "
                f"(currently {word_count} words)"
            ),
        )
    ]


def check_strong_language(text: str, config: FeedbackConfig) -> list[FeedbackSuggestion]:
    if not any(word in text for word in _ABSOLUTE_WORDS):
        return []
    return [
        FeedbackSuggestion(
            id="strong-language",
            category="delivery",
            type="suggestion",
            title="Consider softening absolute language",
            description=(
                'Words like "never" and "always" can be overly restrictive '
                "- use when truly necessary"
            ),
        )
    ]


RULES: list[Rule] = [
    Rule("passive-voice", "correctness", check_passive_voice),
    Rule("punctuation", "correctness", check_punctuation),
    Rule("too-short", "clarity", check_too_short),
    Rule("vague-language", "clarity", check_vague_language),
    Rule("add-examples", "engagement", check_examples),
    Rule("add-structure", "engagement", check_structure),
    Rule("too-long", "delivery", check_too_long),
    Rule("strong-language", "delivery", check_strong_language),
]
