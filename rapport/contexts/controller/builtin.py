"""
Built-in controllers for tables, rows, groups and groupings.

Formatter hooks called (in order):

    TableController     prepare_table, build_table_header, build_table_body,
                        build_table_footer, finalize_table
    RowController       build_row
    GroupController     build_group_header, build_group_body, build_group_footer
    GroupingController  build_grouping_header, build_grouping_body,
                        build_grouping_footer, finalize_grouping

The built-in formatters register themselves for these controllers when the
formatting context is imported.
"""

from rapport.contexts.controller.controller import Controller


class TableController(Controller):
    """Tabular data. Default options: show_table_headers=True."""

    default_options = {"show_table_headers": True}
    prepare_stage = "table"
    build_stages = ("table_header", "table_body", "table_footer")
    finalize_stage = "table"


class RowController(Controller):
    """A single row of values."""

    build_stages = ("row",)


class GroupController(Controller):
    """A named group of rows. Default options: show_table_headers=True."""

    default_options = {"show_table_headers": True}
    build_stages = ("group_header", "group_body", "group_footer")


class GroupingController(Controller):
    """A collection of groups. Default options: show_group_headers=True, style="inline"."""

    default_options = {"show_group_headers": True, "style": "inline"}
    build_stages = ("grouping_header", "grouping_body", "grouping_footer")
    finalize_stage = "grouping"
