"""Output sanitizer removing active content from emitted text."""

import logging
import re


logger = logging.getLogger(__name__)

_DANGEROUS_PATTERNS = (
    # Whole <script>/<iframe> regions, non-greedy
    re.compile(r'<script\b[^<]*(?:(?!</script\s*>)<[^<]*)*</script\s*>', re.IGNORECASE),
    re.compile(r'<iframe\b[^<]*(?:(?!</iframe\s*>)<[^<]*)*</iframe\s*>', re.IGNORECASE),
    # Any other tag whose name starts with script or iframe, closed or not
    re.compile(r'<\s*/?\s*(?:script|iframe)[^>]*>?', re.IGNORECASE),
    re.compile(r'javascript\s*:', re.IGNORECASE),
    re.compile(r'data:[^\n]*?base64', re.IGNORECASE),
)

# Upper bound on rewrite rounds; each round strictly shortens the text
_MAX_ROUNDS = 100


class OutputSanitizer:
    """Strips dangerous embedded content from text.

    Handles:
    - ``<script>`` and ``<iframe>`` elements, case-insensitively
    - Stray opening or closing script/iframe tags
    - ``javascript:`` URI schemes
    - ``data:...base64`` URIs

    Removal is repeated until nothing matches, so fragments that would be
    reassembled by a single pass (``<scr<script></script>ipt>``) are caught
    and ``sanitize(sanitize(x)) == sanitize(x)``.
    """

    def sanitize(self, text: str) -> str:
        """Remove dangerous content from ``text``.

        Args:
            text: Text about to be emitted.

        Returns:
            Sanitized text; empty string for empty or non-string input.
        """
        if not text or not isinstance(text, str):
            return ''

        result = text
        for _ in range(_MAX_ROUNDS):
            cleaned = result
            for pattern in _DANGEROUS_PATTERNS:
                cleaned = pattern.sub('', cleaned)
            if cleaned == result:
                break
            result = cleaned
        else:
            logger.warning("Sanitizer did not converge, dropping remaining markup")
            result = re.sub(r'[<>:]', '', result)

        if result != text:
            logger.debug(f"Sanitizer removed {len(text) - len(result)} characters")
        return result
