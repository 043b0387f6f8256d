"""Input normalization applied before element recognition."""

import logging
import re


logger = logging.getLogger(__name__)

FRONT_MATTER = re.compile(r'\A---[ \t]*\r?\n(?:[\s\S]*?\r?\n)?---[ \t]*(?:\r?\n|\Z)')
HTML_COMMENT = re.compile(r'<!--[\s\S]*?-->')


class Preprocessor:
    """Normalizes raw markdown before conversion.

    Steps, in order:
    - Remove a leading YAML front matter block
    - Normalize CRLF and CR line endings to LF
    - Remove HTML comments, including multi-line ones
    - Trim the document
    """

    def process(self, markdown: str) -> str:
        """Run all preprocessing steps.

        Args:
            markdown: Raw markdown input.

        Returns:
            Normalized markdown, possibly empty.
        """
        result = self._strip_front_matter(markdown)
        result = self._normalize_line_endings(result)
        result = HTML_COMMENT.sub('', result)
        return result.strip()

    def _strip_front_matter(self, markdown: str) -> str:
        result, count = FRONT_MATTER.subn('', markdown, count=1)
        if count:
            logger.debug("Removed YAML front matter")
        return result

    def _normalize_line_endings(self, markdown: str) -> str:
        return markdown.replace('\r\n', '\n').replace('\r', '\n')
