"""
Formatter base class.

A formatter is the backend a controller drives. It owns the data being
rendered, the shared Options and an output sink, and implements whichever
hooks it supports (build_<stage>, prepare_<stage>, finalize_<stage>, layout,
apply_template, setup, finalize). Hooks it does not implement are skipped.
"""

import io
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from rapport.contexts.controller import Options
from rapport.contexts.formatting.logger import _log_debug, _log_warning
from rapport.contexts.formatting.rendering_tools import RenderingTools
from rapport.contexts.formatting.templates import Template


class Formatter(RenderingTools):
    """
    Base class for all formatters.

    Attributes:
        format: Format id this formatter was selected for
        data: Data being rendered
        options: Options shared with the controller
    """

    def __init__(self):
        self.format = None
        self.data = None
        self.options = Options()
        self._buffer = io.StringIO()

    @classmethod
    def renders(cls, format_ids: Union[Any, Iterable[Any]], controllers) -> None:
        """
        Register this formatter for one or more formats on one or more controllers.

        Example:
            CSVFormatter.renders("csv", controllers=[RowController, TableController])
        """
        if isinstance(format_ids, (list, tuple, set)):
            format_ids = list(format_ids)
        else:
            format_ids = [format_ids]
        if not isinstance(controllers, (list, tuple, set)):
            controllers = [controllers]

        for controller in controllers:
            for format_id in format_ids:
                controller.add_format(cls, format_id)

    # ---- output -------------------------------------------------------

    @property
    def output(self):
        """
        Write sink for this render.

        The ``io`` option when one was given (any object with write()),
        otherwise an internal string buffer.
        """
        sink = self.options.io
        return sink if sink is not None else self._buffer

    def rendered_output(self) -> Any:
        """Final output: the ``io`` sink if one was given, else the accumulated string."""
        if self.options.io is not None:
            return self.options.io
        return self._buffer.getvalue()

    def clear_output(self) -> None:
        """Discard accumulated output in the internal buffer."""
        self._buffer = io.StringIO()

    def save_output(self, filename: Union[str, Path]) -> None:
        """
        Append the rendered output to ``filename``.

        An ``io`` sink without getvalue() (e.g. an open file) cannot be read
        back, so nothing is appended and a warning is logged.
        """
        content = self.rendered_output()
        if hasattr(content, "getvalue"):
            content = content.getvalue()
        elif not isinstance(content, (str, bytes)):
            _log_warning(f"Cannot read back {type(content).__name__} output, not saving to {filename}")
            return
        if isinstance(content, bytes):
            with open(filename, "ab") as f:
                f.write(content)
        else:
            with open(filename, "a", encoding="utf-8") as f:
                f.write(str(content))
        _log_debug(f"Saved {self.format} output to {filename}")

    # ---- templates ----------------------------------------------------

    def template(self) -> Optional[Template]:
        """Template named by the ``template`` option, falling back to the default template."""
        name = self.options.template
        selected = Template.get(name) if isinstance(name, str) else None
        if isinstance(name, str) and selected is None:
            _log_warning(f"Template '{name}' not found, using the default template if any")
        return selected or Template.default()

    def apply_template(self) -> None:
        """Fill options that are still unset from the selected template."""
        template = self.template()
        if template is None:
            return
        template.apply(self.options)
        _log_debug(f"Applied template '{template.name}' to {type(self).__name__}")


# ---------------------------------------------------------------------------
# Data shape helpers
# ---------------------------------------------------------------------------


def column_names_of(data: Any) -> List[str]:
    """Column names of a table-like object (empty when it has none)."""
    return [str(name) for name in (getattr(data, "column_names", None) or [])]


def rows_of(data: Any) -> List[List[Any]]:
    """
    Rows of a table-like object as lists of values.

    Accepts an object with a ``data`` attribute holding the rows (Table, Group)
    or a plain sequence of rows. Mapping rows are ordered by column names.
    """
    if data is None:
        return []
    rows = getattr(data, "data", data)
    columns = column_names_of(data)

    result = []
    for row in rows:
        if isinstance(row, Mapping):
            result.append([row.get(name) for name in columns] if columns else list(row.values()))
        else:
            result.append(list(row))
    return result


def cell_text(value: Any) -> str:
    """Text shown for a cell; None renders empty."""
    return "" if value is None else str(value)
