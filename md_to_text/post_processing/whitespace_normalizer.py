"""Whitespace normalization post-processor for converted text."""

import logging
import re
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


@dataclass
class WhitespaceConfig:
    """Configuration for whitespace normalization."""
    # Maximum consecutive line breaks kept
    max_consecutive_newlines: int = 2
    # Strip indentation from every line
    strip_leading_whitespace: bool = True


class WhitespaceNormalizer:
    """Collapses blank lines and trims line whitespace in converted text."""

    def __init__(self, config: Optional[WhitespaceConfig] = None):
        """Initialize the normalizer.

        Args:
            config: Whitespace configuration options.
        """
        self.config = config or WhitespaceConfig()

    def normalize(self, text: str) -> str:
        """Trim every line and collapse runs of blank lines.

        Args:
            text: Converted text.

        Returns:
            Text with at most ``max_consecutive_newlines`` consecutive line
            breaks and no leading or trailing whitespace.
        """
        if not text:
            return ""

        result = re.sub(r'[ \t]+$', '', text, flags=re.MULTILINE)

        if self.config.strip_leading_whitespace:
            result = re.sub(r'^[ \t]+', '', result, flags=re.MULTILINE)

        # Lines were trimmed above, so blank runs are plain \n sequences
        limit = max(self.config.max_consecutive_newlines, 1)
        result = re.sub(r'\n{%d,}' % (limit + 1), '\n' * limit, result)

        return result.strip()
