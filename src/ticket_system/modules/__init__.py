"""Bounded modules: issue, team and user."""
