"""Detection of markdown constructs present in a source document."""

import logging

from ..processing import patterns
from ..processing.models import ElementKind


logger = logging.getLogger(__name__)


def _has_table(markdown: str) -> bool:
    lines = markdown.split('\n')
    for header, separator in zip(lines, lines[1:]):
        if (
            '|' in header
            and not patterns.TABLE_SEPARATOR.match(header)
            and patterns.TABLE_SEPARATOR.match(separator)
        ):
            return True
    return False


def _has_horizontal_rule(markdown: str) -> bool:
    return any(patterns.HORIZONTAL_RULE.match(line) for line in markdown.split('\n'))


_CHECKS = (
    (ElementKind.HEADINGS, lambda md: bool(patterns.HEADING.search(md))),
    (ElementKind.UNORDERED_LISTS, lambda md: bool(patterns.UNORDERED_ITEM.search(md))),
    (ElementKind.ORDERED_LISTS, lambda md: bool(patterns.ORDERED_ITEM.search(md))),
    (ElementKind.LINKS, lambda md: bool(patterns.LINK.search(md))),
    (ElementKind.IMAGES, lambda md: bool(patterns.IMAGE.search(md))),
    (ElementKind.CODE_BLOCKS, lambda md: bool(patterns.CODE_FENCE.search(md))),
    (ElementKind.INLINE_CODE, lambda md: bool(patterns.INLINE_CODE.search(md))),
    (ElementKind.BLOCKQUOTES, lambda md: bool(patterns.BLOCKQUOTE.search(md))),
    (ElementKind.TABLES, _has_table),
    (ElementKind.HORIZONTAL_RULES, _has_horizontal_rule),
    (
        ElementKind.BOLD,
        lambda md: bool(patterns.BOLD.search(md) or patterns.BOLD_UNDERSCORE.search(md)),
    ),
    (
        ElementKind.ITALIC,
        lambda md: bool(patterns.ITALIC.search(md) or patterns.ITALIC_UNDERSCORE.search(md)),
    ),
    (ElementKind.STRIKETHROUGH, lambda md: bool(patterns.STRIKETHROUGH.search(md))),
)


class MetadataAnalyzer:
    """Reports which construct categories appear in a document.

    Runs against the original, unmodified input and never looks at the
    conversion configuration, so the report is the same whatever policies
    were used for rendering.
    """

    def analyze(self, markdown: str) -> frozenset:
        """Detect construct categories in ``markdown``.

        Args:
            markdown: Original document text.

        Returns:
            Frozen set of ElementKind members found.
        """
        if not markdown:
            return frozenset()

        text = markdown.replace('\r\n', '\n').replace('\r', '\n')
        found = frozenset(kind for kind, check in _CHECKS if check(text))
        logger.debug(f"Detected elements: {sorted(kind.value for kind in found)}")
        return found
