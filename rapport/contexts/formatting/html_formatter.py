"""
HTML formatter.

Tables and rows are wrapped in <table> by the layout hook, so rendering with
layout=False yields bare <tr> rows that can be embedded in other markup.
Groups and groupings render through HTMLGroupFormatter, whose layout does not
wrap: each group writes its own table.

Options:
    show_table_headers: Emit a header row of <th> cells (default True)
    show_group_headers: Emit group names (default True)
    standalone: Wrap the result in a complete HTML page
    title: Page title / heading for standalone pages
    style_sheet: CSS inserted into standalone pages
"""

import html
from typing import Any, Callable, Iterable

from rapport.contexts.controller import (
    GroupController,
    GroupingController,
    RowController,
    TableController,
)
from rapport.contexts.formatting.formatter import Formatter, cell_text, column_names_of, rows_of
from rapport.contexts.formatting.registries import html_layouts


class HTMLFormatter(Formatter):
    """HTML markup for rows, tables, groups and groupings."""

    def html_row(self, values: Iterable[Any], tag: str = "td") -> str:
        cells = "".join(f"\t\t\t<{tag}>{html.escape(cell_text(v))}</{tag}>\n" for v in values)
        return f"\t\t<tr>\n{cells}\t\t</tr>\n"

    def layout(self, block: Callable[[], None]) -> None:
        self.output.write("\t<table>\n")
        block()
        self.output.write("\t</table>\n")

    # ---- table --------------------------------------------------------

    def build_table_header(self):
        columns = column_names_of(self.data)
        if self.options.show_table_headers and columns:
            self.output.write(self.html_row(columns, tag="th"))

    def build_table_body(self):
        for row in rows_of(self.data):
            self.output.write(self.html_row(row))

    # ---- row ----------------------------------------------------------

    def build_row(self):
        self.output.write(self.html_row(self.data))

    # ---- group --------------------------------------------------------

    def build_group_header(self):
        if self.options.show_group_headers is not False:
            self.output.write(f"\t<p>{html.escape(cell_text(self.data.name))}</p>\n")

    def build_group_body(self):
        self.output.write("\t<table>\n")
        self.render_table(self.data, {"show_table_headers": self.options.show_table_headers})
        self.output.write("\t</table>\n")

    # ---- grouping -----------------------------------------------------

    def build_grouping_body(self):
        if self.options.style not in (None, "inline"):
            raise ValueError(f"Unsupported grouping style for html: {self.options.style!r}")
        self.render_inline_grouping(
            {
                "show_group_headers": self.options.show_group_headers,
                "show_table_headers": self.options.show_table_headers,
            }
        )

    # ---- page ---------------------------------------------------------

    def finalize(self):
        """Wrap the accumulated markup in a full page when standalone=True."""
        if not self.options.standalone or self.options.io is not None:
            return
        page = html_layouts().render(
            "page.html",
            title=self.options.title or "",
            style=self.options.style_sheet or "",
            body=self._buffer.getvalue(),
        )
        self.clear_output()
        self.output.write(page)


class HTMLGroupFormatter(HTMLFormatter):
    """HTML for groups and groupings. No outer <table>: each group holds its own."""

    def layout(self, block: Callable[[], None]) -> None:
        block()


HTMLFormatter.renders("html", controllers=[RowController, TableController])
HTMLGroupFormatter.renders("html", controllers=[GroupController, GroupingController])
