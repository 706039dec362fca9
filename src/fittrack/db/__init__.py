"""Database module for persisted tracker state."""

from .database import DAILY_METRICS_KEY, WORKOUTS_KEY, StateStore

__all__ = ["StateStore", "DAILY_METRICS_KEY", "WORKOUTS_KEY"]
