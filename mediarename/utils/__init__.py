"""Utility packages: logging, filesystem helpers, external tools."""
