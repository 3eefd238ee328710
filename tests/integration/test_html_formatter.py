"""Integration tests for HTML output."""

import io
from dataclasses import dataclass
from typing import Optional

import pytest

from rapport import Group, GroupController, Grouping, Row, Table, TableController
from rapport.contexts.formatting import HTMLFormatter, HTMLGroupFormatter


@pytest.fixture
def fruit_table():
    return Table(["name", "qty"], [["apple", 3]])


@pytest.mark.integration
def test_table_is_wrapped_by_layout(fruit_table):
    assert fruit_table.render_as("html") == (
        "\t<table>\n"
        "\t\t<tr>\n"
        "\t\t\t<th>name</th>\n"
        "\t\t\t<th>qty</th>\n"
        "\t\t</tr>\n"
        "\t\t<tr>\n"
        "\t\t\t<td>apple</td>\n"
        "\t\t\t<td>3</td>\n"
        "\t\t</tr>\n"
        "\t</table>\n"
    )


@pytest.mark.integration
def test_layout_false_gives_bare_rows(fruit_table):
    output = fruit_table.render_as("html", layout=False, show_table_headers=False)

    assert output == "\t\t<tr>\n\t\t\t<td>apple</td>\n\t\t\t<td>3</td>\n\t\t</tr>\n"


@pytest.mark.integration
def test_cells_are_escaped():
    output = Row(["<b>", "a & b"]).render_as("html")

    assert "<td>&lt;b&gt;</td>" in output
    assert "<td>a &amp; b</td>" in output


@pytest.mark.integration
def test_group_has_single_table():
    group = Group(name="fruit", column_names=["name"], data=[["apple"]])

    output = group.render_as("html")

    assert output.startswith("\t<p>fruit</p>\n\t<table>\n")
    assert output.count("<table>") == 1
    assert output.endswith("\t</table>\n")


@pytest.mark.integration
def test_grouping_renders_each_group():
    grouping = Grouping()
    grouping["fruit"] = Group(name="fruit", column_names=["name"], data=[["apple"]])
    grouping["veg"] = Group(name="veg", column_names=["name"], data=[["carrot"]])

    output = grouping.render_as("html")

    assert output.count("<table>") == 2
    assert output.index("<p>fruit</p>") < output.index("<p>veg</p>")


@pytest.mark.integration
def test_standalone_page(fruit_table):
    output = fruit_table.render_as(
        "html", standalone=True, title="Fruit & Veg", style_sheet="td { padding: 2px; }"
    )

    assert output.startswith("<!DOCTYPE html>")
    assert "<title>Fruit &amp; Veg</title>" in output
    assert "td { padding: 2px; }" in output
    assert "\t\t\t<td>apple</td>\n" in output
    assert output.count("<html") == 1


@pytest.mark.integration
def test_standalone_ignored_with_io_sink(fruit_table):
    sink = io.StringIO()

    fruit_table.render_as("html", standalone=True, io=sink)

    assert "<!DOCTYPE html>" not in sink.getvalue()
    assert sink.getvalue().startswith("\t<table>\n")


@pytest.mark.integration
def test_named_table_is_still_wrapped_in_table():
    """Wrapping follows the controller, not whether the data has a name."""

    @dataclass
    class NamedTable(Table):
        name: Optional[str] = None

    NamedTable.renders_as_table()

    output = NamedTable(["a"], [[1]], name="sales").render_as("html")

    assert output.startswith("\t<table>\n")
    assert output.endswith("\t</table>\n")
    assert "sales" not in output


@pytest.mark.integration
def test_group_formatter_is_registered_for_groups_only():
    assert TableController.formats()["html"] is HTMLFormatter
    assert GroupController.formats()["html"] is HTMLGroupFormatter


@pytest.mark.integration
def test_group_without_table_headers():
    group = Group(name="fruit", column_names=["name"], data=[["apple"]])

    output = group.render_as("html", show_table_headers=False)

    assert "<th>" not in output
    assert "\t\t\t<td>apple</td>\n" in output
