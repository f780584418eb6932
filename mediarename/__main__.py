#!/usr/bin/env python3
"""
Module: mediarename.__main__

This module allows the mediarename package to be executed as a module using:
    python -m mediarename DIRECTORY
"""

import sys

from mediarename.cli import main

if __name__ == "__main__":
    sys.exit(main())
