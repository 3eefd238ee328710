"""
CSV formatter.

Options:
    show_table_headers: Write the column names before the rows (default True)
    show_group_headers: Write group names (default True for groupings)
    format_options: Keyword arguments for csv.writer (e.g. {"delimiter": ";"})
    style: Grouping layout, "inline" (one table per group) or "justified"
           (a single table with a leading group column)
"""

import csv
from typing import Any, Iterable

from rapport.contexts.controller import (
    GroupController,
    GroupingController,
    RowController,
    TableController,
)
from rapport.contexts.formatting.formatter import Formatter, column_names_of, rows_of

DEFAULT_FORMAT_OPTIONS = {"lineterminator": "\n"}


class CSVFormatter(Formatter):
    """Comma-separated output for rows, tables, groups and groupings."""

    def csv_writer(self):
        format_options = {**DEFAULT_FORMAT_OPTIONS, **(self.options.format_options or {})}
        return csv.writer(self.output, **format_options)

    def write_row(self, values: Iterable[Any]) -> None:
        self.csv_writer().writerow(["" if v is None else v for v in values])

    # ---- table --------------------------------------------------------

    def build_table_header(self):
        columns = column_names_of(self.data)
        if self.options.show_table_headers and columns:
            self.write_row(columns)

    def build_table_body(self):
        for row in rows_of(self.data):
            self.write_row(row)

    # ---- row ----------------------------------------------------------

    def build_row(self):
        self.write_row(self.data)

    # ---- group --------------------------------------------------------

    def build_group_header(self):
        if self.options.show_group_headers is not False:
            self.output.write(f"{self.data.name}\n\n")

    def build_group_body(self):
        self.render_table(
            self.data,
            {
                "show_table_headers": self.options.show_table_headers,
                "format_options": self.options.format_options,
            },
        )

    # ---- grouping -----------------------------------------------------

    def build_grouping_header(self):
        if self.options.style != "justified":
            return
        groups = list(self.data.values())
        if self.options.show_table_headers is not False and groups:
            self.write_row(["group"] + column_names_of(groups[0]))

    def build_grouping_body(self):
        if self.options.style == "justified":
            for name, group in self.data.items():
                for index, row in enumerate(rows_of(group)):
                    self.write_row([name if index == 0 else ""] + row)
        elif self.options.style in (None, "inline"):
            self.render_inline_grouping(
                {
                    "show_group_headers": self.options.show_group_headers,
                    "show_table_headers": self.options.show_table_headers,
                    "format_options": self.options.format_options,
                }
            )
        else:
            raise ValueError(f"Unsupported grouping style for csv: {self.options.style!r}")


CSVFormatter.renders(
    "csv", controllers=[RowController, TableController, GroupController, GroupingController]
)
