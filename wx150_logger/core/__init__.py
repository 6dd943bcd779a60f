"""Shared infrastructure for the WX150 logger."""
