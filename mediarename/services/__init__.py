"""Service protocols for mediarename collaborators."""

from mediarename.services.interfaces import MetadataExtractorProtocol

__all__ = [
    "MetadataExtractorProtocol",
]
