"""Command-line helpers shared by WX150 logger entry points."""
