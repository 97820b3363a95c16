"""Suggestion lifecycle — expand/collapse, accept/dismiss, and in-place prompt edits."""

from __future__ import annotations

import logging
import time
from typing import Callable

from pfe.analysis.analyzer import analyze
from pfe.schemas.config import FeedbackConfig
from pfe.schemas.feedback import FeedbackReport, FeedbackSuggestion

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class SuggestionNotApplicableError(ValueError):
    """Raised when applying a suggestion that has no before/after fix."""


class UnknownSuggestionError(KeyError):
    """Raised when a suggestion id is not in the current report."""


class SuggestionLifecycle:
    """UI-side state for a suggestion list.

    At most one suggestion is expanded at a time. Applied ids are kept
    across re-analysis, so a rule that fires again under the same id still
    reads as applied.

    The post-apply auto-collapse is a deadline on ``clock``, checked
    whenever ``expanded_id`` is read. No timers or threads are involved.
    Unlike the browser panel, whose timer closes whatever is open when it
    fires, expanding another suggestion before the deadline cancels the
    pending collapse.
    """

    def __init__(self, collapse_delay: float = 0.3, clock: Clock = time.monotonic) -> None:
        self.collapse_delay = collapse_delay
        self._clock = clock
        self._expanded_id: str | None = None
        self._collapse_at: float | None = None
        self._applied_ids: set[str] = set()

    # ── Expansion ────────────────────────────────────────────

    @property
    def expanded_id(self) -> str | None:
        if self._collapse_at is not None and self._clock() >= self._collapse_at:
            self._expanded_id = None
            self._collapse_at = None
        return self._expanded_id

    def is_expanded(self, suggestion_id: str) -> bool:
        return self.expanded_id == suggestion_id

    def expand(self, suggestion_id: str) -> None:
        """Show one suggestion in detail, replacing any other.

        Cancels a collapse still pending from an earlier apply.
        """
        self._expanded_id = suggestion_id
        self._collapse_at = None

    def collapse(self) -> None:
        self._expanded_id = None
        self._collapse_at = None

    def toggle(self, suggestion_id: str) -> None:
        if self.expanded_id == suggestion_id:
            self.collapse()
        else:
            self.expand(suggestion_id)

    # ── Accept / dismiss ─────────────────────────────────────

    @property
    def applied_ids(self) -> frozenset[str]:
        return frozenset(self._applied_ids)

    def is_applied(self, suggestion_id: str) -> bool:
        return suggestion_id in self._applied_ids

    def apply(self, suggestion: FeedbackSuggestion, buffer: str) -> str:
        """Replace the first occurrence of the suggestion's original text and return the new buffer.

        If the original text is no longer in ``buffer`` the buffer comes back
        unchanged, but the suggestion is still marked applied. An id that is
        already applied is not applied again, even when the rule has found a
        new instance under the same id.
        """
        if not suggestion.is_applicable:
            raise SuggestionNotApplicableError(
                f"Suggestion {suggestion.id!r} has no original/suggested text to apply"
            )
        if suggestion.id in self._applied_ids:
            logger.debug("Skipping %s: already applied", suggestion.id)
            return buffer

        original = suggestion.original_text or ""
        replacement = suggestion.suggested_text or ""
        if original in buffer:
            new_buffer = buffer.replace(original, replacement, 1)
        else:
            logger.debug("Stale apply for %s: original text not in buffer", suggestion.id)
            new_buffer = buffer

        self._applied_ids.add(suggestion.id)
        self._collapse_at = self._clock() + self.collapse_delay
        return new_buffer

    def dismiss(self, suggestion_id: str | None = None) -> None:
        """Close the detail view without applying anything."""
        if suggestion_id is None or self.expanded_id == suggestion_id:
            self.collapse()

    def reset(self) -> None:
        self.collapse()
        self._applied_ids.clear()


class FeedbackSession:
    """Owns a prompt buffer and keeps its analysis current.

    Stands in for the text-input side of the UI: every change to the buffer,
    including accepted suggestions, triggers a full re-analysis.
    """

    def __init__(
        self,
        text: str = "",
        config: FeedbackConfig | None = None,
        lifecycle: SuggestionLifecycle | None = None,
    ) -> None:
        self.config = config or FeedbackConfig()
        self.lifecycle = lifecycle or SuggestionLifecycle(
            collapse_delay=self.config.collapse_delay
        )
        self._text = text
        self._report = analyze(text, self.config)

    @property
    def text(self) -> str:
        return self._text

    @property
    def report(self) -> FeedbackReport:
        return self._report

    def set_text(self, text: str) -> FeedbackReport:
        self._text = text
        self._report = analyze(text, self.config)
        return self._report

    def _lookup(self, suggestion_id: str) -> FeedbackSuggestion:
        suggestion = self._report.get(suggestion_id)
        if suggestion is None:
            raise UnknownSuggestionError(suggestion_id)
        return suggestion

    def expand(self, suggestion_id: str) -> None:
        self.lifecycle.expand(self._lookup(suggestion_id).id)

    def accept(self, suggestion_id: str) -> FeedbackReport:
        """Apply a suggestion from the current report and re-analyze the result."""
        suggestion = self._lookup(suggestion_id)
        new_text = self.lifecycle.apply(suggestion, self._text)
        logger.info("Applied %s (%s)", suggestion.id, suggestion.title)
        return self.set_text(new_text)

    def dismiss(self, suggestion_id: str) -> None:
        self.lifecycle.dismiss(self._lookup(suggestion_id).id)

    def is_applied(self, suggestion_id: str) -> bool:
        return self.lifecycle.is_applied(suggestion_id)
