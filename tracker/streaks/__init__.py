"""Streak and heatmap statistics."""

from .calculator import compute_heatmap, compute_streak, to_day

__all__ = ["compute_heatmap", "compute_streak", "to_day"]
