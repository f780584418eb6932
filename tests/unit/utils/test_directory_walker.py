"""Tests for recursive file discovery.

Author: Michael Economou
Date: 2026-10-12
"""

import os

from mediarename.utils.filesystem import iter_files, relative_name


class TestIterFiles:
    def test_recursive_sorted_absolute(self, library, make_file):
        make_file(library, "b.jpg")
        make_file(library, "a.jpg")
        make_file(library, os.path.join("2023", "z.mov"))
        make_file(library, os.path.join("2023", "trip", "c.heic"))

        found = list(iter_files(str(library)))

        root = str(library)
        assert found == [
            os.path.join(root, "a.jpg"),
            os.path.join(root, "b.jpg"),
            os.path.join(root, "2023", "z.mov"),
            os.path.join(root, "2023", "trip", "c.heic"),
        ]
        assert all(os.path.isabs(p) for p in found)

    def test_directories_are_skipped(self, library):
        (library / "empty" / "deeper").mkdir(parents=True)

        assert list(iter_files(str(library))) == []

    def test_relative_root_is_made_absolute(self, library, make_file, monkeypatch):
        make_file(library, "a.jpg")
        monkeypatch.chdir(str(library.parent))

        found = list(iter_files("library"))

        assert found == [os.path.join(str(library), "a.jpg")]

    def test_missing_root_yields_nothing(self, tmp_path):
        assert list(iter_files(str(tmp_path / "nope"))) == []


class TestRelativeName:
    def test_nested(self, library):
        path = os.path.join(str(library), "2023", "a.jpg")

        assert relative_name(path, str(library)) == os.path.join("2023", "a.jpg")

    def test_top_level(self, library):
        assert relative_name(os.path.join(str(library), "a.jpg"), str(library)) == "a.jpg"
