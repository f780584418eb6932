"""Infrastructure layer - adapters for external collaborators.

This layer contains:
- External tool clients (ExifTool)

Allowed imports:
- models/ and core/errors.py
- External libraries (subprocess, psutil)

Author: Michael Economou
Date: 2026-10-12
"""
