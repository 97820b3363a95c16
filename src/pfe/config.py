"""YAML loaders — feedback-config.yml into FeedbackConfig, agent files into AgentDefinition."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from pfe.schemas.agent import AgentDefinition
from pfe.schemas.config import FeedbackConfig

CONFIG_ENV_VAR = "FEEDBACK_CONFIG"


def _read_mapping(path: Path, kind: str) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    # An empty file loads as None — treat it as an empty mapping.
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{kind} file must be a YAML mapping, got {type(raw).__name__}")
    return raw


def load_config(path: str | Path) -> FeedbackConfig:
    """Load and validate a feedback config file.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the YAML content is invalid.
    """
    raw = _read_mapping(Path(path), "Config")

    # A bare ``penalties:`` key with every entry commented out loads as None.
    if "penalties" in raw and raw["penalties"] is None:
        del raw["penalties"]

    return FeedbackConfig(**raw)


def resolve_config(path: str | Path | None = None) -> FeedbackConfig:
    """Load ``path``, else the file named by $FEEDBACK_CONFIG, else the defaults."""
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR, "")
        if not env_path:
            return FeedbackConfig()
        path = env_path
    return load_config(path)


def load_agent(path: str | Path) -> AgentDefinition:
    """Load and validate an agent definition file."""
    raw = _read_mapping(Path(path), "Agent")
    return AgentDefinition(**raw)
