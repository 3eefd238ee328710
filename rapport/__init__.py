"""
RAPPORT - Reusable rendering pipeline for structured report data

A controller/formatter system: controllers declare the stages of a rendering
pipeline and drive interchangeable formatters (csv, text, html, pdf, or custom)
through them, sharing one options object.

Architecture:
- Controller Context: Pipeline declaration, render orchestration, options, hooks
- Formatting Context: Built-in formatters, templates, layouts, PDF compilation
- Data Context: Renderable tables, rows, groups and groupings
"""

from rapport.contexts.controller import (
    Controller,
    ControllerError,
    ControllerNotSetError,
    FormatNotDetectedError,
    GroupController,
    GroupingController,
    Hooks,
    Options,
    RequiredOptionNotSetError,
    RowController,
    StageAlreadyDefinedError,
    TableController,
    UnknownFormatError,
)
from rapport.contexts.data import Group, Grouping, Row, Table
from rapport.contexts.formatting import (
    CSVFormatter,
    Formatter,
    HTMLFormatter,
    PDFFormatter,
    Template,
    TextFormatter,
)

__version__ = "0.1.0"

__all__ = [
    "Controller",
    "Options",
    "Hooks",
    "TableController",
    "RowController",
    "GroupController",
    "GroupingController",
    "Formatter",
    "CSVFormatter",
    "TextFormatter",
    "HTMLFormatter",
    "PDFFormatter",
    "Template",
    "Table",
    "Row",
    "Group",
    "Grouping",
    "ControllerError",
    "RequiredOptionNotSetError",
    "UnknownFormatError",
    "FormatNotDetectedError",
    "StageAlreadyDefinedError",
    "ControllerNotSetError",
]
