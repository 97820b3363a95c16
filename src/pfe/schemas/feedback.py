"""Pydantic models for prompt feedback — suggestions, scores and the combined report."""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Category = Literal["correctness", "clarity", "engagement", "delivery"]
SuggestionType = Literal["error", "warning", "suggestion"]

CATEGORIES: tuple[str, ...] = ("correctness", "clarity", "engagement", "delivery")

# Display buckets for the overall score, highest threshold first.
SCORE_LABELS: tuple[tuple[int, str], ...] = (
    (85, "Excellent"),
    (70, "Good"),
    (50, "Fair"),
)
LOWEST_LABEL = "Needs work"


class TextPosition(BaseModel):
    """Character offsets into the analyzed text."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def check_ordered(self) -> "TextPosition":
        if self.start > self.end:
            raise ValueError(f"position start ({self.start}) is after end ({self.end})")
        return self


class FeedbackSuggestion(BaseModel):
    """A single detected issue or improvement opportunity."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: Category
    type: SuggestionType
    title: str
    description: str
    original_text: str | None = None
    suggested_text: str | None = None
    position: TextPosition | None = None  # never set by the built-in rules

    @model_validator(mode="after")
    def check_fix_has_target(self) -> "FeedbackSuggestion":
        if self.suggested_text is not None and self.original_text is None:
            raise ValueError(
                f"Suggestion {self.id!r} has suggested_text but no original_text"
            )
        return self

    @property
    def is_applicable(self) -> bool:
        """True when the suggestion carries a mechanical before/after fix."""
        return bool(self.original_text) and bool(self.suggested_text)


class FeedbackScore(BaseModel):
    """Four independent quality dimensions, each 0-100."""

    model_config = ConfigDict(frozen=True)

    correctness: int = Field(default=100, ge=0, le=100)
    clarity: int = Field(default=100, ge=0, le=100)
    engagement: int = Field(default=100, ge=0, le=100)
    delivery: int = Field(default=100, ge=0, le=100)

    @property
    def overall(self) -> int:
        return overall_score(self)

    @property
    def label(self) -> str:
        return score_label(self.overall)

    def as_dict(self) -> dict[str, int]:
        return {c: getattr(self, c) for c in CATEGORIES}


class FeedbackReport(BaseModel):
    """Analyzer output: a score and the suggestions it was computed from."""

    model_config = ConfigDict(frozen=True)

    score: FeedbackScore = FeedbackScore()
    suggestions: list[FeedbackSuggestion] = []

    def by_category(self, category: str) -> list[FeedbackSuggestion]:
        return [s for s in self.suggestions if s.category == category]

    def applicable(self) -> list[FeedbackSuggestion]:
        """Suggestions that can be applied mechanically, in analysis order."""
        return [s for s in self.suggestions if s.is_applicable]

    def get(self, suggestion_id: str) -> FeedbackSuggestion | None:
        for s in self.suggestions:
            if s.id == suggestion_id:
                return s
        return None


def _round_half_up(value: float) -> int:
    # Matches JavaScript's Math.round, which the score display was built against.
    return math.floor(value + 0.5)


def overall_score(score: FeedbackScore) -> int:
    """Rounded mean of the four category scores."""
    values = score.as_dict().values()
    return _round_half_up(sum(values) / len(CATEGORIES))


def score_label(value: int) -> str:
    """Display bucket for an overall score."""
    for threshold, label in SCORE_LABELS:
        if value >= threshold:
            return label
    return LOWEST_LABEL
