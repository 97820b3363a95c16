"""Pydantic models shared across the engine, loaders and renderers."""
