"""Processing module for markdown to plain text conversion."""

from .errors import ConversionError, MdToTextError, NetworkError, SecurityError
from .models import (
    BatchResult,
    CodeHandling,
    ConversionConfig,
    ConversionMetadata,
    ConversionResult,
    ElementKind,
    FileResult,
    HeadingStyle,
    ListStyle,
    SourceConversion,
    TableData,
    TableFormat,
)
from .preprocessor import Preprocessor
from .table_renderer import TableRenderer, TableRendererConfig
from .element_converter import ElementConverter

__all__ = [
    "ConversionError",
    "MdToTextError",
    "NetworkError",
    "SecurityError",
    "BatchResult",
    "CodeHandling",
    "ConversionConfig",
    "ConversionMetadata",
    "ConversionResult",
    "ElementKind",
    "FileResult",
    "HeadingStyle",
    "ListStyle",
    "SourceConversion",
    "TableData",
    "TableFormat",
    "Preprocessor",
    "TableRenderer",
    "TableRendererConfig",
    "ElementConverter",
]
