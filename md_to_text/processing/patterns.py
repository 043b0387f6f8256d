"""Construct definitions shared by rendering and element detection.

The converter rewrites with these patterns and the metadata analyzer
searches the original input with the same ones, so both agree on what
counts as a heading, a link, a table and so on.
"""

import re


HEADING = re.compile(r'^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$', re.MULTILINE)

# Links must not swallow the "[alt](src)" part of an image
LINK = re.compile(r'(?<!!)\[([^\]\n]*)\]\(([^)\n]*)\)')
IMAGE = re.compile(r'!\[([^\]\n]*)\]\(([^)\n]*)\)')

CODE_FENCE = re.compile(r'```([^\n`]*)(\n?)([\s\S]*?)```')
INLINE_CODE = re.compile(r'`([^`\n]+)`')

UNORDERED_ITEM = re.compile(r'^[ \t]*[*+-][ \t]+', re.MULTILINE)
ORDERED_ITEM = re.compile(r'^[ \t]*\d+\.[ \t]+', re.MULTILINE)
LIST_ITEM = re.compile(
    r'^(?P<indent>[ \t]*)(?P<marker>[*+-]|\d+\.)[ \t]+'
    r'(?:\[(?P<check>[ xX])\][ \t]+)?(?P<content>.*)$',
    re.MULTILINE,
)

BLOCKQUOTE = re.compile(r'^[ \t]*>[ \t]*', re.MULTILINE)

BOLD = re.compile(r'\*\*(?=\S)([^*\n]+?)(?<=\S)\*\*')
BOLD_UNDERSCORE = re.compile(r'(?<!\w)__(?=\S)([^_\n]+?)(?<=\S)__(?!\w)')
STRIKETHROUGH = re.compile(r'~~(?=\S)([^~\n]+?)(?<=\S)~~')
ITALIC = re.compile(r'(?<!\*)\*(?=[^\s*])([^*\n]+?)(?<=\S)\*(?!\*)')
ITALIC_UNDERSCORE = re.compile(r'(?<![\w_])_(?=[^\s_])([^_\n]+?)(?<=\S)_(?![\w_])')

HORIZONTAL_RULE = re.compile(r'^[ \t]*-{3,}[ \t]*$')

TABLE_ROW = re.compile(r'^[ \t]*\|?.*\|.*$')
TABLE_SEPARATOR = re.compile(
    r'^[ \t]*\|?(?:[ \t]*:?-+:?[ \t]*\|)+(?:[ \t]*:?-+:?[ \t]*)?$'
)
CELL_SPLIT = re.compile(r'(?<!\\)\|')
