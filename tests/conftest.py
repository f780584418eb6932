"""
Module: conftest.py

Author: Michael Economou
Date: 2026-10-12

Global pytest configuration and fixtures for the mediarename test suite.
"""

import os
import shutil

import pytest

from tests.mocks import FakeExtractor


def pytest_collection_modifyitems(session, config, items):
    """Skip tests that need a real exiftool when it is not installed."""
    _ = session
    _ = config

    if shutil.which("exiftool"):
        return

    skip_exiftool = pytest.mark.skip(reason="exiftool not installed")
    for item in items:
        if "exiftool" in item.keywords:
            item.add_marker(skip_exiftool)


@pytest.fixture
def library(tmp_path):
    """Temporary library root."""
    root = tmp_path / "library"
    root.mkdir()
    return root


@pytest.fixture
def make_file():
    """Create a small file (parents included) and return its path as str."""

    def _make(directory, name, content=b"data"):
        path = os.path.join(str(directory), name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)
        return path

    return _make


@pytest.fixture
def fake_extractor():
    """Empty FakeExtractor; tests register metadata per file name."""
    return FakeExtractor()


@pytest.fixture
def jpeg_fields():
    """Typical JPEG metadata as ExifTool reports it."""
    return {
        "FileType": "JPEG",
        "DateTimeOriginal": "2023:05:01 10:15:30",
        "CreateDate": "2023:05:01 10:15:30",
        "Make": "Canon",
    }
