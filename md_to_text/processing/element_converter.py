"""Rewrites markdown constructs into plain text."""

import logging
import re
from functools import partial
from typing import Optional

from . import patterns
from .models import (
    CodeHandling,
    ConversionConfig,
    HeadingStyle,
    ListStyle,
)
from .table_renderer import TableRenderer, TableRendererConfig
from ..post_processing.sanitizer import OutputSanitizer


logger = logging.getLogger(__name__)

# Private use characters wrapping the index of a shielded region
_SHIELD_OPEN = '\ue000'
_SHIELD_CLOSE = '\ue001'
_SHIELD = re.compile(f'{_SHIELD_OPEN}(\\d+){_SHIELD_CLOSE}')


def _shield(replacements: list[str], rendered: str) -> str:
    replacements.append(rendered)
    return f'{_SHIELD_OPEN}{len(replacements) - 1}{_SHIELD_CLOSE}'


class ElementConverter:
    """Converts markdown to plain text with a fixed sequence of rewrites.

    Each pass scans the whole output of the previous one:

    1. Code - fenced blocks and inline spans are rendered per policy and
       shielded from every later pass
    2. Raw HTML fragments - sanitized in place
    3. Headings
    4. Links
    5. Images
    6. Lists
    7. Blockquotes
    8. Emphasis removal
    9. Horizontal rules
    10. Tables

    Malformed constructs (unclosed fences, ragged tables) are passed through
    or rendered best-effort; no pass raises on odd input.
    """

    def __init__(
        self,
        config: Optional[ConversionConfig] = None,
        sanitizer: Optional[OutputSanitizer] = None
    ):
        """Initialize the converter.

        Args:
            config: Rendering policies. Mappings are accepted too.
            sanitizer: Sanitizer used on raw HTML fragments.
        """
        self.config = ConversionConfig.resolve(config)
        self.sanitizer = sanitizer or OutputSanitizer()
        self.table_renderer = TableRenderer(
            TableRendererConfig(table_format=self.config.table_format)
        )

    def render(self, markdown: str) -> str:
        """Convert preprocessed markdown to plain text.

        Args:
            markdown: Preprocessed markdown.

        Returns:
            Converted text, before whitespace normalization.
        """
        shielded = []
        shield = partial(_shield, shielded)
        restore = partial(self._restore_code, replacements=shielded)
        result = self._render_code(markdown, shield)

        result = self._render_html(result)
        result = self._render_headings(result, shield, restore)
        result = self._render_links(result)
        result = self._render_images(result)
        result = self._render_lists(result)
        result = self._render_blockquotes(result)
        result = self._strip_emphasis(result)
        result = self._render_horizontal_rules(result)
        result = self.table_renderer.render_tables(result, cell_filter=restore)

        return restore(result)

    def _render_code(self, markdown: str, shield) -> str:
        """Render code per policy and leave placeholders in the text.

        Args:
            markdown: Input text.
            shield: Stores a rendered code region and returns its placeholder.

        Returns:
            Text with each code region replaced by a placeholder.
        """
        handling = self.config.code_handling
        # Sentinels in the input itself would be mistaken for placeholders
        text = markdown.replace(_SHIELD_OPEN, '').replace(_SHIELD_CLOSE, '')

        def fence(match: re.Match) -> str:
            if handling == CodeHandling.REMOVE:
                return shield('')
            if handling == CodeHandling.INLINE:
                info, newline, body = match.groups()
                # ```code``` on a single line has no language tag
                return shield(body if newline else info + body)
            return shield(match.group(0))

        def span(match: re.Match) -> str:
            if handling == CodeHandling.REMOVE:
                return shield('')
            if handling == CodeHandling.INLINE:
                return shield(match.group(1))
            return shield(match.group(0))

        result, fences = patterns.CODE_FENCE.subn(fence, text)
        result, spans = patterns.INLINE_CODE.subn(span, result)
        if fences or spans:
            logger.debug(f"Rendered {fences + spans} code region(s) with policy {handling.value}")
        return result

    def _restore_code(self, text: str, replacements: list[str]) -> str:
        def replace(match: re.Match) -> str:
            index = int(match.group(1))
            if index < len(replacements):
                return replacements[index]
            return match.group(0)

        return _SHIELD.sub(replace, text)

    def _render_html(self, text: str) -> str:
        # Code is shielded here, so only raw HTML outside code changes
        return self.sanitizer.sanitize(text)

    def _render_headings(self, text: str, shield, restore) -> str:
        style = self.config.heading_style

        def replace(match: re.Match) -> str:
            level = len(match.group(1))
            content = match.group(2).strip()
            if style == HeadingStyle.UNDERLINE:
                char = '=' if level <= 2 else '-'
                width = len(self._display_text(content, restore))
                # Shielded so the rule pass never rewrites a dash underline
                return f"{content}\n{shield(char * width)}\n"
            if style == HeadingStyle.NONE:
                return f"{content}\n"
            return f"{'#' * level} {content}\n"

        return patterns.HEADING.sub(replace, text)

    def _display_text(self, content: str, restore) -> str:
        """Render inline constructs of a heading to measure its width."""
        result = self._render_links(content)
        result = self._render_images(result)
        result = self._strip_emphasis(result)
        return restore(result)

    def _render_links(self, text: str) -> str:
        if self.config.preserve_links:
            return patterns.LINK.sub(
                lambda m: f"{m.group(1)} ({m.group(2).strip()})", text
            )
        return patterns.LINK.sub(r'\1', text)

    def _render_images(self, text: str) -> str:
        def replace(match: re.Match) -> str:
            alt = match.group(1) or 'image'
            if self.config.preserve_links:
                return f"[Image: {alt}] ({match.group(2).strip()})"
            return f"[Image: {alt}]"

        return patterns.IMAGE.sub(replace, text)

    def _render_lists(self, text: str) -> str:
        style = self.config.list_style

        def replace(match: re.Match) -> str:
            marker = match.group('marker')
            if style == ListStyle.NUMBERS and marker[0].isdigit():
                return match.group(0)

            check = match.group('check')
            checkbox = ''
            if check is not None:
                checkbox = '[ ] ' if check == ' ' else '[x] '

            if style == ListStyle.NONE:
                prefix = ''
            elif style == ListStyle.NUMBERS:
                prefix = '1. '
            else:
                prefix = '• '
            return f"{prefix}{checkbox}{match.group('content')}"

        return patterns.LIST_ITEM.sub(replace, text)

    def _render_blockquotes(self, text: str) -> str:
        return patterns.BLOCKQUOTE.sub('> ', text)

    def _strip_emphasis(self, text: str) -> str:
        result = text
        # Double delimiters first so ** is not read as two italics
        for pattern in (
            patterns.BOLD,
            patterns.BOLD_UNDERSCORE,
            patterns.STRIKETHROUGH,
            patterns.ITALIC,
            patterns.ITALIC_UNDERSCORE,
        ):
            result = pattern.sub(r'\1', result)
        return result

    def _render_horizontal_rules(self, text: str) -> str:
        lines = text.split('\n')
        for i, line in enumerate(lines):
            if patterns.HORIZONTAL_RULE.match(line):
                lines[i] = '---'
        return '\n'.join(lines)
