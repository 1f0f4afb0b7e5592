# src/day_planner/planner/errors.py

from __future__ import annotations


class PlannerError(Exception):
    """Base class for planner errors shown to the user."""


class TaskValidationError(PlannerError, ValueError):
    """Missing or malformed task/settings input. Raised before any state change."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
