"""
Data Context

Responsibilities:
- Provides renderable containers (tables, rows, groups, groupings)
- Binds each container to its built-in controller

Owns: In-memory report data
Never: Knows how a format looks (formatters do)
"""

from rapport.contexts.data.structures import Group, Grouping, Row, Table

__all__ = ["Table", "Row", "Group", "Grouping"]
