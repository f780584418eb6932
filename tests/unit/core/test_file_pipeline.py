"""Tests for the concurrent rename pipeline.

Author: Michael Economou
Date: 2026-10-12

Uses the in-memory FakeExtractor, so no ExifTool is required.
"""

import os
from unittest.mock import patch

import pytest

from mediarename.core.errors import ErrorKind
from mediarename.core.file_pipeline import FilePipeline
from mediarename.core.name_allocator import NameAllocator
from mediarename.models.outcome import OutcomeStatus
from tests.mocks import FakeExtractor, RaisingExtractor


def _names(directory):
    return sorted(os.listdir(str(directory)))


class TestSingleFile:
    """process_file() walks one file through every step."""

    def test_renames_jpeg(self, library, make_file, fake_extractor, jpeg_fields):
        path = make_file(library, "IMG_0001.JPG")
        fake_extractor.add("IMG_0001.JPG", **jpeg_fields)

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.status is OutcomeStatus.RENAMED
        assert outcome.target == os.path.join(str(library), "2023-05-01_101530_01.jpg")
        assert _names(library) == ["2023-05-01_101530_01.jpg"]

    def test_mov_with_offset(self, library, make_file, fake_extractor):
        path = make_file(library, "clip.MOV")
        fake_extractor.add("clip.MOV", FileType="MOV", CreationDate="2023:05:01 10:15:30-05:00")

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.status is OutcomeStatus.RENAMED
        assert _names(library) == ["2023-05-01_101530_01.mov"]

    def test_heic_with_subseconds(self, library, make_file, fake_extractor):
        path = make_file(library, "IMG_0002.HEIC")
        fake_extractor.add(
            "IMG_0002.HEIC", FileType="HEIC", SubSecDateTimeOriginal="2023:05:01 10:15:30.48+02:00"
        )

        FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert _names(library) == ["2023-05-01_101530_01.heic"]

    def test_already_canonical(self, library, make_file, fake_extractor, jpeg_fields):
        path = make_file(library, "2023-05-01_101530_01.jpg")
        fake_extractor.add("2023-05-01_101530_01.jpg", **jpeg_fields)

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.status is OutcomeStatus.CANONICAL
        assert outcome.target == path
        assert _names(library) == ["2023-05-01_101530_01.jpg"]

    def test_collision_gets_next_index(self, library, make_file, fake_extractor, jpeg_fields):
        make_file(library, "2023-05-01_101530_01.jpg", b"other")
        path = make_file(library, "IMG_0003.JPG")
        fake_extractor.add("IMG_0003.JPG", **jpeg_fields)

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert os.path.basename(outcome.target) == "2023-05-01_101530_02.jpg"
        with open(os.path.join(str(library), "2023-05-01_101530_01.jpg"), "rb") as f:
            assert f.read() == b"other"

    def test_dry_run_leaves_disk_untouched(self, library, make_file, fake_extractor, jpeg_fields):
        path = make_file(library, "IMG_0001.JPG")
        fake_extractor.add("IMG_0001.JPG", **jpeg_fields)

        outcome = FilePipeline(fake_extractor, workers=1, dry_run=True).process_file(path)

        assert outcome.status is OutcomeStatus.PLANNED
        assert os.path.basename(outcome.target) == "2023-05-01_101530_01.jpg"
        assert _names(library) == ["IMG_0001.JPG"]


class TestPerFileFailures:
    """Every failure is recorded against the file and never raised."""

    def test_unsupported_type_left_untouched(self, library, make_file, fake_extractor):
        path = make_file(library, "anim.gif")
        fake_extractor.add("anim.gif", FileType="GIF", DateTimeOriginal="2023:05:01 10:15:30")

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.error.kind is ErrorKind.UNSUPPORTED_TYPE
        assert outcome.error.file_name == "anim.gif"
        assert _names(library) == ["anim.gif"]

    def test_extraction_failure(self, library, make_file, fake_extractor):
        path = make_file(library, "broken.jpg")

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.EXTRACTION_FAILURE
        assert outcome.error.cause == "File format error"

    def test_missing_file_type(self, library, make_file, fake_extractor):
        path = make_file(library, "odd.jpg")
        fake_extractor.add("odd.jpg", DateTimeOriginal="2023:05:01 10:15:30")

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.EXTRACTION_FAILURE
        assert "FileType" in outcome.error.cause

    def test_timestamp_not_found(self, library, make_file, fake_extractor):
        path = make_file(library, "nodate.png")
        fake_extractor.add("nodate.png", FileType="PNG")

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.TIMESTAMP_NOT_FOUND

    def test_timestamp_unparseable(self, library, make_file, fake_extractor):
        path = make_file(library, "bad.jpg")
        fake_extractor.add("bad.jpg", FileType="JPEG", DateTimeOriginal="not-a-date")

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.TIMESTAMP_UNPARSEABLE
        assert "not-a-date" in outcome.error.cause

    def test_allocation_exhausted(self, library, make_file, fake_extractor, jpeg_fields):
        make_file(library, "2023-05-01_101530_01.jpg")
        path = make_file(library, "IMG.JPG")
        fake_extractor.add("IMG.JPG", **jpeg_fields)
        pipeline = FilePipeline(fake_extractor, workers=1, allocator=NameAllocator(max_index=1))

        outcome = pipeline.process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.ALLOCATION_EXHAUSTED

    def test_rename_failure_releases_reservation(self, library, make_file, fake_extractor, jpeg_fields):
        path = make_file(library, "IMG.JPG")
        fake_extractor.add("IMG.JPG", **jpeg_fields)
        allocator = NameAllocator()
        pipeline = FilePipeline(fake_extractor, workers=1, allocator=allocator)

        with patch("mediarename.core.file_pipeline.os.rename", side_effect=PermissionError(13, "Permission denied")):
            outcome = pipeline.process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.RENAME_FAILURE
        assert outcome.error.cause == "Permission denied"
        assert allocator.reserved_count == 0
        assert _names(library) == ["IMG.JPG"]

    def test_extractor_exception(self, library, make_file):
        path = make_file(library, "IMG.JPG")

        outcome = FilePipeline(RaisingExtractor(), workers=1).process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.EXTRACTION_FAILURE
        assert outcome.error.cause == "backend crashed"

    def test_unexpected_error_is_contained(self, library, make_file, fake_extractor, jpeg_fields):
        path = make_file(library, "IMG.JPG")
        fake_extractor.add("IMG.JPG", **jpeg_fields)
        pipeline = FilePipeline(fake_extractor, workers=1)

        with patch.object(pipeline.parser, "parse", side_effect=KeyError("boom")):
            outcome = pipeline.process_file(path, str(library))

        assert outcome.error.kind is ErrorKind.UNEXPECTED

    def test_relative_name_in_subdirectory(self, library, make_file, fake_extractor):
        path = make_file(library, os.path.join("2023", "trip", "broken.jpg"))

        outcome = FilePipeline(fake_extractor, workers=1).process_file(path, str(library))

        assert outcome.error.file_name == os.path.join("2023", "trip", "broken.jpg")


class TestRun:
    """run() over a directory tree."""

    def test_mixed_tree(self, library, make_file, fake_extractor, jpeg_fields):
        make_file(library, "IMG_0001.JPG")
        make_file(library, "IMG_0002.JPG")
        make_file(library, os.path.join("videos", "clip.MOV"))
        make_file(library, "anim.gif")
        make_file(library, "notes.txt")
        fake_extractor.add("IMG_0001.JPG", **jpeg_fields)
        fake_extractor.add("IMG_0002.JPG", **jpeg_fields)
        fake_extractor.add("clip.MOV", FileType="MOV", CreationDate="2022:12:24 18:00:00+01:00")
        fake_extractor.add("anim.gif", FileType="GIF")

        report = FilePipeline(fake_extractor, workers=3).run(str(library))

        assert report.produced == 5
        assert report.consumed == 5
        assert len(report.outcomes) == 5
        assert report.renamed_count == 3
        assert report.issue_count == 2
        assert {e.kind for e in report.errors} == {ErrorKind.UNSUPPORTED_TYPE, ErrorKind.EXTRACTION_FAILURE}
        assert _names(library) == [
            "2023-05-01_101530_01.jpg",
            "2023-05-01_101530_02.jpg",
            "anim.gif",
            "notes.txt",
            "videos",
        ]
        assert _names(library / "videos") == ["2022-12-24_180000_01.mov"]

    def test_empty_directory(self, library, fake_extractor):
        report = FilePipeline(fake_extractor, workers=2).run(str(library))

        assert report.produced == 0
        assert report.consumed == 0
        assert report.outcomes == []

    def test_directories_are_not_tasks(self, library, fake_extractor):
        (library / "empty" / "nested").mkdir(parents=True)

        report = FilePipeline(fake_extractor, workers=1).run(str(library))

        assert report.produced == 0
        assert fake_extractor.calls == []

    def test_small_queue_applies_backpressure(self, library, make_file, jpeg_fields):
        extractor = FakeExtractor(delay=0.001)
        for index in range(25):
            name = f"IMG_{index:04d}.JPG"
            make_file(library, name)
            extractor.add(name, **jpeg_fields)

        report = FilePipeline(extractor, workers=2, queue_size=1).run(str(library))

        assert report.produced == 25
        assert report.renamed_count == 25
        assert sorted(extractor.calls) == sorted(set(extractor.calls))

    def test_progress_callback(self, library, make_file, fake_extractor, jpeg_fields):
        make_file(library, "IMG.JPG")
        make_file(library, "bad.jpg")
        fake_extractor.add("IMG.JPG", **jpeg_fields)
        seen = []

        FilePipeline(fake_extractor, workers=2, progress_callback=seen.append).run(str(library))

        assert sorted(o.status.value for o in seen) == ["failed", "renamed"]

    def test_failing_progress_callback_does_not_stall(self, library, make_file, fake_extractor):
        for index in range(5):
            make_file(library, f"f{index}.jpg")

        def explode(outcome):
            raise RuntimeError("callback bug")

        report = FilePipeline(fake_extractor, workers=1, queue_size=1, progress_callback=explode).run(
            str(library)
        )

        assert len(report.outcomes) == 5

    @pytest.mark.parametrize(("workers", "queue_size"), [(0, 10), (1, 0)])
    def test_invalid_sizing(self, fake_extractor, workers, queue_size):
        with pytest.raises(ValueError):
            FilePipeline(fake_extractor, workers=workers, queue_size=queue_size)
