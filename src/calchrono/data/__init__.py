"""Bundled calendar data (read through importlib.resources)."""
