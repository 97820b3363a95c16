"""Markdown and HTML renderers for feedback reports."""
