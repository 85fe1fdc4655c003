"""Modular-monolith ticket tracker: Issue, Team and User modules."""

__version__ = "1.0.0"
