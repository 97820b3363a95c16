"""Rule pipeline and scoring."""

from pfe.analysis.analyzer import analyze, compute_score

__all__ = ["analyze", "compute_score"]
