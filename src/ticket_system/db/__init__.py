"""Persistence bootstrap and unit of work."""
