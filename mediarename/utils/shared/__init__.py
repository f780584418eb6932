"""Shared utilities package.

External tool detection and path resolution.
"""
