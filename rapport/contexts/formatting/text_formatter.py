"""
Plain-text formatter.

Renders tables as fixed-width boxes (good for CLI output or logs):

    +-------+-----+
    | name  | qty |
    +-------+-----+
    | apple |   3 |
    +-------+-----+

Options:
    show_table_headers: Draw the header row (default True)
    show_group_headers: Print group names (default True)
    max_col_width: Truncate cells wider than this many characters
    alignment: "right" aligns numbers to the right (default), "left" aligns everything left
"""

from numbers import Number
from typing import Any, List

from rapport.contexts.controller import (
    GroupController,
    GroupingController,
    RowController,
    TableController,
)
from rapport.contexts.formatting.formatter import Formatter, cell_text, column_names_of, rows_of


class TextFormatter(Formatter):
    """Fixed-width text for rows, tables, groups and groupings."""

    def __init__(self):
        super().__init__()
        self.column_widths: List[int] = []

    # ---- helpers ------------------------------------------------------

    def fit(self, text: str) -> str:
        limit = self.options.max_col_width
        if limit and len(text) > limit:
            return text[: max(limit - 1, 0)] + "~"
        return text

    def compute_widths(self, columns: List[str], rows: List[List[Any]]) -> List[int]:
        count = max([len(columns)] + [len(row) for row in rows])
        widths = [0] * count
        for line in [columns] + rows:
            for i, value in enumerate(line):
                widths[i] = max(widths[i], len(self.fit(cell_text(value))))
        return widths

    def separator(self) -> str:
        return "+" + "+".join("-" * (w + 2) for w in self.column_widths) + "+\n"

    def format_line(self, values: List[Any]) -> str:
        cells = []
        for i, width in enumerate(self.column_widths):
            value = values[i] if i < len(values) else None
            text = self.fit(cell_text(value))
            if isinstance(value, Number) and self.options.alignment != "left":
                cells.append(text.rjust(width))
            else:
                cells.append(text.ljust(width))
        return "| " + " | ".join(cells) + " |\n"

    # ---- table --------------------------------------------------------

    def prepare_table(self):
        columns = column_names_of(self.data)
        rows = rows_of(self.data)
        self.column_widths = self.compute_widths(columns, rows) if (columns or rows) else []

    def build_table_header(self):
        if not self.column_widths:
            return
        self.output.write(self.separator())
        columns = column_names_of(self.data)
        if self.options.show_table_headers and columns:
            self.output.write(self.format_line(columns))
            self.output.write(self.separator())

    def build_table_body(self):
        for row in rows_of(self.data):
            self.output.write(self.format_line(row))

    def build_table_footer(self):
        if self.column_widths:
            self.output.write(self.separator())

    # ---- row ----------------------------------------------------------

    def build_row(self):
        values = list(self.data)
        if not self.column_widths:
            self.column_widths = [len(self.fit(cell_text(v))) for v in values]
        self.output.write(self.format_line(values))

    # ---- group --------------------------------------------------------

    def build_group_header(self):
        if self.options.show_group_headers is not False:
            self.output.write(f"{self.data.name}:\n\n")

    def build_group_body(self):
        self.render_table(
            self.data,
            {
                "show_table_headers": self.options.show_table_headers,
                "max_col_width": self.options.max_col_width,
                "alignment": self.options.alignment,
            },
        )

    # ---- grouping -----------------------------------------------------

    def build_grouping_body(self):
        if self.options.style not in (None, "inline"):
            raise ValueError(f"Unsupported grouping style for text: {self.options.style!r}")
        self.render_inline_grouping(
            {
                "show_group_headers": self.options.show_group_headers,
                "show_table_headers": self.options.show_table_headers,
                "max_col_width": self.options.max_col_width,
                "alignment": self.options.alignment,
            }
        )


TextFormatter.renders(
    "text", controllers=[RowController, TableController, GroupController, GroupingController]
)
