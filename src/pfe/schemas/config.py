"""Configuration schema — validates feedback-config.yml."""

from pydantic import BaseModel, Field, model_validator


class Penalties(BaseModel):
    """Points deducted from a category score per suggestion in that category."""

    correctness: int = Field(default=15, ge=0, le=100)
    clarity: int = Field(default=20, ge=0, le=100)
    engagement: int = Field(default=15, ge=0, le=100)
    delivery: int = Field(default=15, ge=0, le=100)


class FeedbackConfig(BaseModel):
    """Engine tuning loaded from feedback-config.yml.

    Every field is optional; ``FeedbackConfig()`` gives the stock rule set.
    """

    penalties: Penalties = Penalties()

    # Clarity — prompts with fewer space-separated words than this are "too brief"
    min_words: int = Field(default=10, ge=0)

    # Delivery — prompts with more whitespace-separated words than this are "too lengthy"
    max_words: int = Field(default=500, ge=1)

    # Engagement — character lengths above which examples / step structure are expected
    examples_min_length: int = Field(default=50, ge=0)
    structure_min_length: int = Field(default=100, ge=0)

    # Lifecycle — seconds before an applied suggestion's detail view collapses
    collapse_delay: float = Field(default=0.3, ge=0)

    @model_validator(mode="after")
    def check_word_bounds(self) -> "FeedbackConfig":
        if self.min_words > self.max_words:
            raise ValueError(
                f"min_words ({self.min_words}) must not exceed max_words ({self.max_words})"
            )
        return self
