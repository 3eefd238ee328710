"""
Shortcuts for rendering nested structures from inside a formatter.

Each helper renders through a built-in controller using the current format,
writes into the current formatter's output and turns layout off, so that e.g.
a table body can be rendered row by row with the row formatter.
"""

from typing import Any, Callable, Optional

from rapport.contexts.controller import (
    GroupController,
    GroupingController,
    RowController,
    TableController,
)


class RenderingTools:
    """Mixin for formatters. Expects ``format``, ``data``, ``output``."""

    def render_row(self, row, options: Optional[dict] = None, configure: Optional[Callable] = None):
        """Render a row with RowController into the current output."""
        return self._render_helper(RowController, row, options, configure)

    def render_table(self, table, options: Optional[dict] = None, configure: Optional[Callable] = None):
        """Render a table with TableController into the current output."""
        return self._render_helper(TableController, table, options, configure)

    def render_group(self, group, options: Optional[dict] = None, configure: Optional[Callable] = None):
        """Render a group with GroupController into the current output."""
        return self._render_helper(GroupController, group, options, configure)

    def render_grouping(self, grouping, options: Optional[dict] = None, configure: Optional[Callable] = None):
        """Render a grouping with GroupingController into the current output."""
        return self._render_helper(GroupingController, grouping, options, configure)

    def render_inline_grouping(self, options: Optional[dict] = None, configure: Optional[Callable] = None):
        """Render every group in ``self.data``, each followed by a blank line."""
        for group in self.data.values():
            self.render_group(group, options, configure)
            self.output.write("\n")

    def _render_helper(self, controller, source_data: Any, options, configure):
        merged = {"data": source_data, "io": self.output, "layout": False}
        # Unset (None) options fall back to the nested controller's defaults
        merged.update({k: v for k, v in (options or {}).items() if v is not None})
        return controller.render(self.format, merged, configure=configure)
