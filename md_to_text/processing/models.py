"""Data models for markdown to plain text conversion."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar, Union


class ListStyle(Enum):
    """Prefix policy for list items."""
    BULLETS = "bullets"
    NUMBERS = "numbers"
    NONE = "none"


class CodeHandling(Enum):
    """Policy for fenced code blocks and inline code spans."""
    PRESERVE = "preserve"
    REMOVE = "remove"
    INLINE = "inline"


class TableFormat(Enum):
    """Rendering policy for pipe tables."""
    SIMPLE = "simple"
    GRID = "grid"
    NONE = "none"


class HeadingStyle(Enum):
    """Rendering policy for ATX headings."""
    HASH = "hash"
    UNDERLINE = "underline"
    NONE = "none"


class ElementKind(Enum):
    """Construct categories reported in conversion metadata."""
    HEADINGS = "headings"
    UNORDERED_LISTS = "unordered-lists"
    ORDERED_LISTS = "ordered-lists"
    LINKS = "links"
    IMAGES = "images"
    CODE_BLOCKS = "code-blocks"
    INLINE_CODE = "inline-code"
    BLOCKQUOTES = "blockquotes"
    TABLES = "tables"
    HORIZONTAL_RULES = "horizontal-rules"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"


E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: Type[E], value: Any, default: E) -> E:
    """Map a raw option value onto ``enum_cls``, falling back to ``default``."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return default
    return default


# Wire-format option names accepted by ConversionConfig.from_options
_OPTION_ALIASES = {
    "preserveLinks": "preserve_links",
    "listStyle": "list_style",
    "codeHandling": "code_handling",
    "tableFormat": "table_format",
    "headingStyle": "heading_style",
}


@dataclass(frozen=True)
class ConversionConfig:
    """Rendering policies for a single conversion.

    Policy fields accept enum members or their string values. Anything
    unset or unrecognized resolves to the documented default.
    """
    preserve_links: bool = False
    list_style: ListStyle = ListStyle.BULLETS
    code_handling: CodeHandling = CodeHandling.PRESERVE
    table_format: TableFormat = TableFormat.SIMPLE
    heading_style: HeadingStyle = HeadingStyle.HASH

    def __post_init__(self):
        object.__setattr__(self, "preserve_links", self.preserve_links is True)
        object.__setattr__(
            self, "list_style", _coerce(ListStyle, self.list_style, ListStyle.BULLETS)
        )
        object.__setattr__(
            self,
            "code_handling",
            _coerce(CodeHandling, self.code_handling, CodeHandling.PRESERVE),
        )
        object.__setattr__(
            self, "table_format", _coerce(TableFormat, self.table_format, TableFormat.SIMPLE)
        )
        object.__setattr__(
            self, "heading_style", _coerce(HeadingStyle, self.heading_style, HeadingStyle.HASH)
        )

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "ConversionConfig":
        """Build a config from a mapping of option names to values.

        Both snake_case names and the camelCase names used on the wire
        (``preserveLinks``, ``listStyle``...) are accepted. Unknown keys
        are ignored.

        Args:
            options: Option mapping, or None for all defaults.

        Returns:
            The resolved configuration.
        """
        if not options:
            return cls()
        kwargs = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__ and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def resolve(
        cls, config: Union["ConversionConfig", Mapping[str, Any], None]
    ) -> "ConversionConfig":
        """Normalize None, a mapping or a config into a config."""
        if isinstance(config, cls):
            return config
        return cls.from_options(config)

    def to_dict(self) -> dict:
        return {
            "preserveLinks": self.preserve_links,
            "listStyle": self.list_style.value,
            "codeHandling": self.code_handling.value,
            "tableFormat": self.table_format.value,
            "headingStyle": self.heading_style.value,
        }


@dataclass(frozen=True)
class TableData:
    """A recognized pipe table, header and body as rows of cells."""
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    @property
    def column_count(self) -> int:
        return max([len(self.header)] + [len(row) for row in self.rows])

    def padded(self) -> "TableData":
        """Return a copy where every row has ``column_count`` cells."""
        width = self.column_count

        def pad(row: tuple[str, ...]) -> tuple[str, ...]:
            return row + ("",) * (width - len(row))

        return TableData(
            header=pad(self.header),
            rows=tuple(pad(row) for row in self.rows),
        )


@dataclass(frozen=True)
class ConversionMetadata:
    """Statistics gathered while converting one document."""
    original_length: int
    converted_length: int
    processing_time_ms: float
    elements_found: frozenset = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        return {
            "originalLength": self.original_length,
            "convertedLength": self.converted_length,
            "processingTimeMs": round(self.processing_time_ms, 3),
            "elementsFound": [
                kind.value for kind in ElementKind if kind in self.elements_found
            ],
        }


@dataclass(frozen=True)
class ConversionResult:
    """Plain text output of a conversion plus its metadata."""
    text: str
    metadata: ConversionMetadata

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class SourceConversion:
    """A conversion result together with details about where the input came from."""
    result: ConversionResult
    source: dict = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.result.text

    def to_dict(self) -> dict:
        data = self.result.to_dict()
        data["metadata"].update(self.source)
        return data


@dataclass
class FileResult:
    """Outcome of converting one file in a batch."""
    file: str
    success: bool
    text: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"file": self.file, "success": self.success}
        if self.text is not None:
            data["text"] = self.text
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class BatchResult:
    """Aggregated outcome of a directory conversion."""
    total_files: int = 0
    processed_files: int = 0
    failed_files: int = 0
    results: list[FileResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed_files == 0

    @property
    def success_rate(self) -> float:
        if not self.total_files:
            return 0.0
        return self.processed_files / self.total_files * 100

    def format_summary(self) -> str:
        """Render a human-readable report of the batch."""
        lines = [
            "Batch conversion completed",
            f"Total files: {self.total_files}",
            f"Processed: {self.processed_files}",
            f"Failed: {self.failed_files}",
            f"Success rate: {self.success_rate:.1f}%",
            "",
        ]
        if self.results:
            lines.append("Results:")
            for file_result in self.results:
                if file_result.success:
                    lines.append(f"[OK] {file_result.file}")
                    if file_result.text:
                        lines.append(f"   Preview: {file_result.text.splitlines()[0]}")
                else:
                    lines.append(f"[FAIL] {file_result.file}: {file_result.error}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "totalFiles": self.total_files,
            "processedFiles": self.processed_files,
            "failedFiles": self.failed_files,
            "results": [r.to_dict() for r in self.results],
        }
