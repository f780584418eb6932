"""Module: __init__.py

Author: Michael Economou
Date: 2026-10-12

Core package: naming rules and the rename pipeline.
"""
