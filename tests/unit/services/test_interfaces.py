"""Tests for the service protocols.

Author: Michael Economou
Date: 2026-10-12
"""

from mediarename.infra.external.exiftool_wrapper import ExifToolWrapper
from mediarename.services.interfaces import MetadataExtractorProtocol
from tests.mocks import FakeExtractor, RaisingExtractor


class TestMetadataExtractorProtocol:
    def test_exiftool_wrapper_satisfies_protocol(self):
        assert issubclass(ExifToolWrapper, MetadataExtractorProtocol)

    def test_fakes_satisfy_protocol(self):
        assert isinstance(FakeExtractor(), MetadataExtractorProtocol)
        assert isinstance(RaisingExtractor(), MetadataExtractorProtocol)

    def test_object_without_close_does_not(self):
        class ExtractOnly:
            def extract(self, path):
                return None

        assert not isinstance(ExtractOnly(), MetadataExtractorProtocol)
