"""Prompt Feedback Engine — rule-based scoring and fix suggestions for agent prompts."""

__version__ = "0.1.0"
