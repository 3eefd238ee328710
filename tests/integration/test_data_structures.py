"""Integration tests for the renderable data structures."""

import pytest

from rapport import (
    ControllerNotSetError,
    Group,
    GroupController,
    Grouping,
    GroupingController,
    Row,
    RowController,
    Table,
    TableController,
)


@pytest.mark.integration
def test_structures_bind_builtin_controllers():
    assert Table.controller() is TableController
    assert Row.controller() is RowController
    assert Group.controller() is GroupController
    assert Grouping.controller() is GroupingController


@pytest.mark.integration
def test_mapping_rows_follow_column_order():
    table = Table(["name", "qty"], [{"qty": 3, "name": "apple"}])
    table.append({"name": "pear"})

    assert table.data == [["apple", 3], ["pear", None]]
    assert table.column("qty") == [3, None]
    assert len(table) == 2
    assert list(table) == table.data


@pytest.mark.integration
def test_group_by_removes_grouping_column():
    table = Table(
        ["region", "name", "qty"],
        [["north", "apple", 3], ["south", "pear", 1], ["north", "fig", 2]],
    )

    grouping = table.group_by("region")

    assert list(grouping) == ["north", "south"]
    north = grouping["north"]
    assert north.name == "north"
    assert north.column_names == ["name", "qty"]
    assert north.data == [["apple", 3], ["fig", 2]]


@pytest.mark.integration
def test_group_by_unknown_column_raises():
    with pytest.raises(ValueError):
        Table(["a"], [[1]]).group_by("b")


@pytest.mark.integration
def test_from_csv(tmp_path):
    source = tmp_path / "stock.csv"
    source.write_text("name,qty\napple,3\npear,10\n")

    table = Table.from_csv(source)

    assert table.column_names == ["name", "qty"]
    assert table.data == [["apple", "3"], ["pear", "10"]]


@pytest.mark.integration
def test_from_csv_without_header(tmp_path):
    source = tmp_path / "stock.tsv"
    source.write_text("apple\t3\n")

    table = Table.from_csv(source, has_header=False, delimiter="\t")

    assert table.column_names == []
    assert table.data == [["apple", "3"]]


@pytest.mark.integration
def test_csv_round_trip_through_grouping(tmp_path):
    source = tmp_path / "stock.csv"
    source.write_text("region,name\nnorth,apple\nsouth,pear\n")
    target = tmp_path / "grouped.csv"

    Table.from_csv(source).group_by("region").save_as(target)

    assert target.read_text() == "north\n\nname\napple\n\nsouth\n\nname\npear\n\n"


@pytest.mark.integration
def test_custom_structure_renders_through_row_controller():
    class Ledger(Row):
        def renderable_data(self, format_id):
            return [f"{v:.1f}" for v in self]

    Ledger.renders_as_row()

    assert Ledger([1, 2.25]).render_as("csv") == "1.0,2.2\n"


@pytest.mark.integration
def test_subclass_needs_its_own_binding():
    class Ledger(Row):
        pass

    with pytest.raises(ControllerNotSetError):
        Ledger([1]).render_as("csv")
