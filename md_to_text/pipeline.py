"""Main conversion pipeline orchestrating markdown to plain text conversion."""

import fnmatch
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .fetcher import fetch_url_content
from .post_processing import MetadataAnalyzer, OutputSanitizer, WhitespaceNormalizer
from .processing import (
    BatchResult,
    ConversionConfig,
    ConversionError,
    ConversionMetadata,
    ConversionResult,
    ElementConverter,
    FileResult,
    Preprocessor,
    SourceConversion,
)
from .security import SecurityConfig, SecurityValidator


logger = logging.getLogger(__name__)

ConfigLike = Union[ConversionConfig, Mapping[str, Any], None]

# Characters of converted text kept per file in batch results
PREVIEW_LENGTH = 200


def convert_markdown(markdown: str, config: ConfigLike = None) -> ConversionResult:
    """Convert markdown text to plain text.

    Stages:
    1. Preprocessing - front matter, line endings, HTML comments
    2. Element conversion - per-construct rewrites under ``config``
    3. Postprocessing - whitespace normalization
    4. Sanitization - final removal of active content
    5. Metadata analysis - constructs present in the original input

    Every stage is built per call, so concurrent calls never share state.

    Args:
        markdown: Markdown input.
        config: Rendering policies, as a ConversionConfig or an option mapping.

    Returns:
        ConversionResult with the plain text and metadata.

    Raises:
        ConversionError: If the input is empty or not a string, or if any
            stage fails unexpectedly (the failure is kept on ``cause``).
    """
    start = time.perf_counter()
    try:
        if not markdown or not isinstance(markdown, str):
            raise ConversionError('Input must be a non-empty string')

        resolved = ConversionConfig.resolve(config)
        sanitizer = OutputSanitizer()

        text = Preprocessor().process(markdown)
        text = ElementConverter(resolved, sanitizer).render(text)
        text = WhitespaceNormalizer().normalize(text)
        text = sanitizer.sanitize(text).strip()

        elements = MetadataAnalyzer().analyze(markdown)
        metadata = ConversionMetadata(
            original_length=len(markdown),
            converted_length=len(text),
            processing_time_ms=(time.perf_counter() - start) * 1000,
            elements_found=elements,
        )
        return ConversionResult(text=text, metadata=metadata)
    except ConversionError:
        raise
    except Exception as e:
        logger.exception("Unexpected failure while converting markdown")
        raise ConversionError('Failed to convert markdown', cause=e) from e


def quick_convert(markdown: str, **options: Any) -> str:
    """Quick conversion function for simple use cases.

    Args:
        markdown: Markdown input.
        **options: ConversionConfig fields (``list_style="none"``...).

    Returns:
        Converted plain text.
    """
    return convert_markdown(markdown, options).text


@dataclass
class PipelineConfig:
    """Configuration for the conversion pipeline."""
    # Default rendering policies, overridable per call
    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    # Upper bound on files converted at once by convert_directory
    max_workers: int = 5


class ConversionPipeline:
    """Converts markdown from text, local files, URLs and directories.

    The pipeline only guards and reads its inputs; all conversion goes
    through the stateless ``convert_markdown``.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        """Initialize the pipeline.

        Args:
            config: Pipeline configuration.
        """
        self.config = config or PipelineConfig()
        self.validator = SecurityValidator(self.config.security)

    def _resolve(self, config: ConfigLike) -> ConversionConfig:
        if config is None:
            return self.config.conversion
        return ConversionConfig.resolve(config)

    def convert(self, markdown: str, config: ConfigLike = None) -> ConversionResult:
        """Convert markdown text with the pipeline's default policies."""
        return convert_markdown(markdown, self._resolve(config))

    def convert_file(
        self,
        file_path: Union[str, Path],
        config: ConfigLike = None
    ) -> SourceConversion:
        """Convert a local markdown file.

        Args:
            file_path: Path to a .md, .markdown or .txt file.
            config: Rendering policies for this call.

        Returns:
            SourceConversion with file name, path, size and modification time.

        Raises:
            SecurityError: If the path or size is refused.
            ConversionError: If the file is missing, unreadable or empty.
        """
        self.validator.validate_file_path(file_path)
        path = Path(file_path)

        try:
            stats = path.stat()
        except OSError as e:
            raise ConversionError(f"File not found or cannot be accessed: {file_path}", cause=e) from e
        if not path.is_file():
            raise ConversionError(f"Path is not a file: {file_path}")

        self.validator.validate_file_size(stats.st_size)

        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ConversionError(f"Failed to read file: {e}", cause=e) from e

        logger.info(f"Converting {path.name}")
        result = self.convert(content, config)
        source = {
            "fileName": path.name,
            "filePath": str(file_path),
            "fileSize": stats.st_size,
            "lastModified": datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc).isoformat(),
        }
        return SourceConversion(result=result, source=source)

    def convert_url(self, url: str, config: ConfigLike = None) -> SourceConversion:
        """Fetch remote markdown and convert it.

        Args:
            url: http(s) URL of the document.
            config: Rendering policies for this call.

        Returns:
            SourceConversion with the source URL and fetch time.

        Raises:
            SecurityError: If the URL or response size is refused.
            NetworkError: If the document cannot be fetched.
            ConversionError: If the fetched document is empty.
        """
        self.validator.validate_url(url)
        content = fetch_url_content(url, validator=self.validator)
        result = self.convert(content, config)
        source = {
            "sourceUrl": url,
            "fetchedAt": datetime.now(timezone.utc).isoformat(),
        }
        return SourceConversion(result=result, source=source)

    def find_markdown_files(
        self,
        directory: Union[str, Path],
        pattern: str = "*.md",
        recursive: bool = True
    ) -> list[Path]:
        """List files under ``directory`` whose name matches ``pattern``.

        Matching is case-insensitive. Unreadable subdirectories are skipped.
        """
        pattern = pattern.lower()
        files = []

        def on_error(error: OSError) -> None:
            logger.warning(f"Cannot read directory {error.filename}")

        for root, dirs, names in os.walk(directory, onerror=on_error):
            dirs.sort()
            for name in sorted(names):
                if fnmatch.fnmatch(name.lower(), pattern):
                    files.append(Path(root) / name)
            if not recursive:
                break
        return files

    def convert_directory(
        self,
        directory: Union[str, Path],
        pattern: str = "*.md",
        recursive: bool = True,
        config: ConfigLike = None,
        output_dir: Optional[Union[str, Path]] = None
    ) -> BatchResult:
        """Convert every matching file in a directory.

        Files are converted concurrently, at most ``max_workers`` at a time.
        A failing file is recorded in the result and never stops the batch.

        Args:
            directory: Directory to scan.
            pattern: Glob pattern for file names.
            recursive: Whether to descend into subdirectories.
            config: Rendering policies for every file.
            output_dir: When given, the full text of each converted file is
                written there as a .txt file mirroring the source layout.

        Returns:
            BatchResult with one FileResult per file, in discovery order.

        Raises:
            SecurityError: If the directory path is refused.
            ConversionError: If the directory does not exist.
        """
        self.validator.validate_file_path(directory)
        directory = Path(directory)
        if not directory.exists():
            raise ConversionError(f"Directory not found or cannot be accessed: {directory}")
        if not directory.is_dir():
            raise ConversionError(f"Path is not a directory: {directory}")

        files = self.find_markdown_files(directory, pattern or "*.md", recursive)
        logger.info(f"Found {len(files)} file(s) matching {pattern} in {directory}")

        resolved = self._resolve(config)
        output_root = Path(output_dir) if output_dir else None
        workers = max(1, self.config.max_workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(
                executor.map(
                    lambda f: self._convert_batch_file(f, directory, resolved, output_root),
                    files,
                )
            )

        batch = BatchResult(total_files=len(files), results=results)
        batch.processed_files = sum(1 for r in results if r.success)
        batch.failed_files = len(results) - batch.processed_files
        logger.info(f"Converted {batch.processed_files}/{batch.total_files} files")
        return batch

    def _convert_batch_file(
        self,
        file_path: Path,
        base_dir: Path,
        config: ConversionConfig,
        output_root: Optional[Path] = None
    ) -> FileResult:
        relative = file_path.relative_to(base_dir)
        name = str(relative)
        try:
            text = self.convert_file(file_path, config).text
            if output_root is not None:
                target = output_root / relative.with_suffix('.txt')
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(text + '\n', encoding='utf-8')
        except Exception as e:
            logger.error(f"[FAIL] {name}: {e}")
            return FileResult(file=name, success=False, error=str(e))

        if len(text) > PREVIEW_LENGTH:
            text = text[:PREVIEW_LENGTH] + '...'
        return FileResult(file=name, success=True, text=text)
