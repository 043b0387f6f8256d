from md_to_text.processing.models import TableData, TableFormat
from md_to_text.processing.table_renderer import TableRenderer, TableRendererConfig

TABLE = "| Name | Qty |\n|------|:---:|\n| apple | 3 |\n| kiwi | 12 |"


def renderer(table_format: TableFormat) -> TableRenderer:
    return TableRenderer(TableRendererConfig(table_format=table_format))


def test_parse_table_into_rows():
    table = renderer(TableFormat.SIMPLE).parse_table(TABLE.split('\n'))
    assert table.header == ("Name", "Qty")
    assert table.rows == (("apple", "3"), ("kiwi", "12"))
    assert table.column_count == 2


def test_ragged_rows_are_padded():
    lines = ["| a | b | c |", "|---|---|---|", "| 1 |", "| 1 | 2 | 3 | 4 |"]
    table = renderer(TableFormat.SIMPLE).parse_table(lines)
    assert table.column_count == 4
    assert table.header == ("a", "b", "c", "")
    assert table.rows[0] == ("1", "", "", "")


def test_escaped_pipe_stays_in_cell():
    lines = ["| expr | meaning |", "| --- | --- |", "| a \\| b | either |"]
    table = renderer(TableFormat.SIMPLE).parse_table(lines)
    assert table.rows == (("a | b", "either"),)


def test_simple_format():
    result = renderer(TableFormat.SIMPLE).render_tables(TABLE)
    assert result == "Name\tQty\napple\t3\nkiwi\t12"


def test_grid_format():
    result = renderer(TableFormat.GRID).render_tables(TABLE)
    assert result.split('\n') == [
        "+-------+-----+",
        "| Name  | Qty |",
        "+-------+-----+",
        "| apple | 3   |",
        "| kiwi  | 12  |",
        "+-------+-----+",
    ]


def test_grid_header_only():
    result = renderer(TableFormat.GRID).render(TableData(header=("a", "bb")))
    assert result == "+---+----+\n| a | bb |\n+---+----+"


def test_none_format_drops_table():
    text = "Before\n\n" + TABLE + "\n\nAfter"
    result = renderer(TableFormat.NONE).render_tables(text)
    assert "apple" not in result
    assert result.startswith("Before")
    assert result.endswith("After")


def test_table_without_outer_pipes():
    text = "a | b\n--- | ---\n1 | 2"
    assert renderer(TableFormat.SIMPLE).render_tables(text) == "a\tb\n1\t2"


def test_non_tables_pass_through():
    r = renderer(TableFormat.GRID)
    # No separator row
    assert r.render_tables("a | b\n1 | 2") == "a | b\n1 | 2"
    # A horizontal rule is not a separator
    assert r.render_tables("a | b\n---\ntext") == "a | b\n---\ntext"


def test_table_ends_at_blank_line():
    text = "| a | b |\n|---|---|\n| 1 | 2 |\n\n| not | body |"
    result = renderer(TableFormat.SIMPLE).render_tables(text)
    assert result == "a\tb\n1\t2\n\n| not | body |"


def test_cell_filter_applied_before_layout():
    result = renderer(TableFormat.SIMPLE).render_tables(
        "| a | b |\n|---|---|\n| x | y |", cell_filter=str.upper
    )
    assert result == "A\tB\nX\tY"
