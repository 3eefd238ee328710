"""
Renderable Data Structures

Small containers for the built-in controllers: a table of rows, a single row,
a named group and a grouping of groups. Each one mixes in Hooks, so

    Table(["name", "qty"], [["apple", 3]]).render_as("csv")

renders through TableController. Formatters only rely on the attribute shape
(column_names, data, name), so any object providing it renders the same way.
"""

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from rapport.contexts.controller import Hooks


class Row(list, Hooks):
    """A row of values. Renders through RowController."""


Row.renders_as_row()


@dataclass
class Table(Hooks):
    """
    Tabular data.

    Attributes:
        column_names: Header names (may be empty)
        data: Rows, each a list of values (mappings are ordered by column_names)
    """

    column_names: List[str] = field(default_factory=list)
    data: List[List[Any]] = field(default_factory=list)

    def __post_init__(self):
        self.column_names = list(self.column_names)
        self.data = [self._coerce_row(row) for row in self.data]

    def _coerce_row(self, row: Union[Sequence, Mapping]) -> List[Any]:
        if isinstance(row, Mapping):
            return [row.get(name) for name in self.column_names]
        return list(row)

    def __iter__(self) -> Iterator[List[Any]]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def append(self, row: Union[Sequence, Mapping]) -> None:
        self.data.append(self._coerce_row(row))

    def column(self, name: str) -> List[Any]:
        """Values of one column, in row order."""
        index = self.column_names.index(name)
        return [row[index] for row in self.data]

    def group_by(self, name: str) -> "Grouping":
        """
        Split the table into groups keyed by the values of one column.

        The grouping column is removed from the groups' rows.
        """
        index = self.column_names.index(name)
        remaining = [c for i, c in enumerate(self.column_names) if i != index]

        grouping = Grouping()
        for row in self.data:
            key = str(row[index])
            if key not in grouping:
                grouping[key] = Group(name=key, column_names=remaining)
            grouping[key].append([v for i, v in enumerate(row) if i != index])
        return grouping

    @classmethod
    def from_csv(cls, path: Path, has_header: bool = True, delimiter: str = ",") -> "Table":
        """
        Load a table from a CSV file.

        Args:
            path: CSV file to read
            has_header: Treat the first row as column names
            delimiter: Field delimiter
        """
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f, delimiter=delimiter))

        column_names: List[str] = []
        if has_header and rows:
            column_names, rows = rows[0], rows[1:]
        return cls(column_names=column_names, data=rows)


Table.renders_as_table()


@dataclass
class Group(Table):
    """
    A named table.

    Attributes:
        name: Group name shown in group headers
    """

    name: Optional[str] = None


Group.renders_as_group()


class Grouping(dict, Hooks):
    """Groups keyed by name, in insertion order. Renders through GroupingController."""


Grouping.renders_as_grouping()
