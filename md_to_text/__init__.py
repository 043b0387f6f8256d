"""md-to-text: Markdown to plain text conversion."""

from .pipeline import (
    ConversionPipeline,
    PipelineConfig,
    convert_markdown,
    quick_convert,
)
from .processing import (
    BatchResult,
    CodeHandling,
    ConversionConfig,
    ConversionError,
    ConversionMetadata,
    ConversionResult,
    ElementKind,
    FileResult,
    HeadingStyle,
    ListStyle,
    MdToTextError,
    NetworkError,
    SecurityError,
    SourceConversion,
    TableFormat,
)
from .security import SecurityConfig, SecurityValidator

__version__ = "1.0.0"

__all__ = [
    # Pipeline
    "ConversionPipeline",
    "PipelineConfig",
    "convert_markdown",
    "quick_convert",
    # Models
    "ConversionConfig",
    "ConversionMetadata",
    "ConversionResult",
    "SourceConversion",
    "BatchResult",
    "FileResult",
    "ElementKind",
    "ListStyle",
    "CodeHandling",
    "TableFormat",
    "HeadingStyle",
    # Errors
    "MdToTextError",
    "ConversionError",
    "SecurityError",
    "NetworkError",
    # Security
    "SecurityConfig",
    "SecurityValidator",
]
