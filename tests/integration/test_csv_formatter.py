"""Integration tests for CSV output through the built-in controllers."""

import pytest

from rapport import Group, Grouping, Row, Table, TableController


@pytest.fixture
def fruit_table():
    return Table(["name", "qty"], [["apple", 3], ["pear", 10]])


@pytest.fixture
def produce_grouping():
    grouping = Grouping()
    grouping["fruit"] = Group(name="fruit", column_names=["name", "qty"], data=[["apple", 3]])
    grouping["veg"] = Group(name="veg", column_names=["name", "qty"], data=[["carrot", 5]])
    return grouping


@pytest.mark.integration
def test_table_with_headers(fruit_table):
    assert fruit_table.render_as("csv") == "name,qty\napple,3\npear,10\n"


@pytest.mark.integration
def test_table_without_headers(fruit_table):
    assert fruit_table.render_as("csv", show_table_headers=False) == "apple,3\npear,10\n"


@pytest.mark.integration
def test_format_options_reach_csv_writer(fruit_table):
    output = fruit_table.render_as("csv", format_options={"delimiter": ";"})

    assert output == "name;qty\napple;3\npear;10\n"


@pytest.mark.integration
def test_values_needing_quotes():
    table = Table(["note"], [["a,b"], ['say "hi"']])

    assert table.render_as("csv") == 'note\n"a,b"\n"say ""hi"""\n'


@pytest.mark.integration
def test_controller_render_with_plain_rows():
    output = TableController.render("csv", data=[[1, 2], [3, None]])

    assert output == "1,2\n3,\n"


@pytest.mark.integration
def test_row():
    assert Row(["a", 1, None]).render_as("csv") == "a,1,\n"


@pytest.mark.integration
def test_group():
    group = Group(name="fruit", column_names=["name", "qty"], data=[["apple", 3]])

    assert group.render_as("csv") == "fruit\n\nname,qty\napple,3\n"


@pytest.mark.integration
def test_group_without_group_header():
    group = Group(name="fruit", column_names=["name"], data=[["apple"]])

    assert group.render_as("csv", show_group_headers=False) == "name\napple\n"


@pytest.mark.integration
def test_inline_grouping(produce_grouping):
    assert produce_grouping.render_as("csv") == (
        "fruit\n\nname,qty\napple,3\n\n"
        "veg\n\nname,qty\ncarrot,5\n\n"
    )


@pytest.mark.integration
def test_justified_grouping():
    grouping = Grouping()
    grouping["fruit"] = Group(name="fruit", column_names=["name"], data=[["apple"], ["pear"]])
    grouping["veg"] = Group(name="veg", column_names=["name"], data=[["carrot"]])

    output = grouping.render_as("csv", style="justified")

    assert output == "group,name\nfruit,apple\n,pear\nveg,carrot\n"


@pytest.mark.integration
def test_unsupported_grouping_style_raises(produce_grouping):
    with pytest.raises(ValueError, match="diagonal"):
        produce_grouping.render_as("csv", style="diagonal")


@pytest.mark.integration
def test_save_as_csv_appends(tmp_path, fruit_table):
    target = tmp_path / "fruit.csv"

    fruit_table.save_as(target)
    fruit_table.save_as(target, show_table_headers=False)

    assert target.read_text() == "name,qty\napple,3\npear,10\napple,3\npear,10\n"
