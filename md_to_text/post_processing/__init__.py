"""Post-processing module for converted plain text."""

from .sanitizer import OutputSanitizer
from .whitespace_normalizer import WhitespaceConfig, WhitespaceNormalizer
from .metadata_analyzer import MetadataAnalyzer

__all__ = [
    "OutputSanitizer",
    "WhitespaceConfig",
    "WhitespaceNormalizer",
    "MetadataAnalyzer",
]
