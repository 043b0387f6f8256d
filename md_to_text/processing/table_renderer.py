"""Pipe table recognition and plain text rendering."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from . import patterns
from .models import TableData, TableFormat


logger = logging.getLogger(__name__)


@dataclass
class TableRendererConfig:
    """Configuration for table rendering."""
    table_format: TableFormat = TableFormat.SIMPLE
    # Separator placed between cells in simple output
    simple_delimiter: str = '\t'


class TableRenderer:
    """Finds pipe tables in text and re-renders them.

    A table is a row containing a pipe, immediately followed by a separator
    row (``| --- | :-: |``), followed by any number of non-blank rows that
    contain a pipe. Anything that does not fit this shape is left alone.
    """

    def __init__(self, config: Optional[TableRendererConfig] = None):
        """Initialize the renderer.

        Args:
            config: Rendering configuration.
        """
        self.config = config or TableRendererConfig()

    def render_tables(
        self,
        text: str,
        cell_filter: Optional[Callable[[str], str]] = None
    ) -> str:
        """Rewrite every table found in ``text``.

        Args:
            text: Document text.
            cell_filter: Optional function applied to each cell before
                layout, e.g. to restore shielded content.

        Returns:
            Text with tables rendered per the configured format.
        """
        lines = text.split('\n')
        result_lines = []
        i = 0
        found = 0

        while i < len(lines):
            if self._starts_table(lines, i):
                end = i + 2
                while end < len(lines) and lines[end].strip() and '|' in lines[end]:
                    end += 1
                table = self.parse_table(lines[i:end], cell_filter)
                rendered = self.render(table)
                if rendered:
                    result_lines.extend(rendered.split('\n'))
                found += 1
                i = end
                continue
            result_lines.append(lines[i])
            i += 1

        if found:
            logger.debug(f"Rendered {found} table(s) as {self.config.table_format.value}")
        return '\n'.join(result_lines)

    def _starts_table(self, lines: list[str], index: int) -> bool:
        if index + 1 >= len(lines):
            return False
        header = lines[index]
        return (
            '|' in header
            and not patterns.TABLE_SEPARATOR.match(header)
            and bool(patterns.TABLE_SEPARATOR.match(lines[index + 1]))
        )

    def parse_table(
        self,
        lines: list[str],
        cell_filter: Optional[Callable[[str], str]] = None
    ) -> TableData:
        """Split table lines into a TableData.

        Args:
            lines: Header row, separator row and body rows.
            cell_filter: Optional function applied to each cell.

        Returns:
            The table as rows of cells, padded to a common width.
        """
        header = self._split_row(lines[0], cell_filter)
        rows = tuple(self._split_row(line, cell_filter) for line in lines[2:])
        return TableData(header=header, rows=rows).padded()

    def _split_row(
        self,
        line: str,
        cell_filter: Optional[Callable[[str], str]]
    ) -> tuple[str, ...]:
        row = line.strip()
        if row.startswith('|'):
            row = row[1:]
        if row.endswith('|') and not row.endswith('\\|'):
            row = row[:-1]
        cells = [cell.strip().replace('\\|', '|') for cell in patterns.CELL_SPLIT.split(row)]
        if cell_filter:
            cells = [cell_filter(cell) for cell in cells]
        return tuple(cells)

    def render(self, table: TableData) -> str:
        """Render one table per the configured format."""
        if self.config.table_format == TableFormat.NONE:
            return ''
        if self.config.table_format == TableFormat.GRID:
            return self._render_grid(table)
        return self._render_simple(table)

    def _render_simple(self, table: TableData) -> str:
        delimiter = self.config.simple_delimiter
        return '\n'.join(delimiter.join(row) for row in (table.header,) + table.rows)

    def _render_grid(self, table: TableData) -> str:
        widths = [
            max(len(row[col]) for row in (table.header,) + table.rows)
            for col in range(table.column_count)
        ]
        border = '+' + '+'.join('-' * (width + 2) for width in widths) + '+'

        def format_row(row: tuple[str, ...]) -> str:
            cells = [cell.ljust(width) for cell, width in zip(row, widths)]
            return '| ' + ' | '.join(cells) + ' |'

        lines = [border, format_row(table.header), border]
        if table.rows:
            lines.extend(format_row(row) for row in table.rows)
            lines.append(border)
        return '\n'.join(lines)
