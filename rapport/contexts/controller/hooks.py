"""
Rendering hooks for data structures.

Mixing Hooks into a class gives its instances render_as() and save_as(), which
forward to the controller bound with renders_with() (or one of the
renders_as_* shortcuts). If the instance defines renderable_data(format_id),
its return value is rendered; otherwise the instance itself is.

Example:

    class Ledger(list, Hooks):
        def renderable_data(self, format_id):
            return [entry.amount for entry in self]

    Ledger.renders_as_row()
    Ledger(entries).render_as("csv")
"""

from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from rapport.contexts.controller.exceptions import (
    ControllerNotSetError,
    FormatNotDetectedError,
    UnknownFormatError,
)
from rapport.contexts.controller.options import Options


class Hooks:
    """Mixin giving a data type a render_as()/save_as() entry point."""

    @classmethod
    def renders_with(cls, controller: type, options: Optional[Mapping] = None, **kwargs: Any) -> None:
        """
        Bind the controller render_as() forwards to.

        Default rendering options given here are used unless overridden by the
        options passed to render_as().

        Example:
            MyStructure.renders_with(CustomController, font_size=14)
        """
        cls._controller = controller
        cls._rendering_options = {**dict(options or {}), **kwargs}

    @classmethod
    def controller(cls) -> Optional[type]:
        """
        The controller class bound to this type (None if unbound).

        Bindings are not inherited: a subclass renders only after its own
        renders_with() call.
        """
        return cls.__dict__.get("_controller")

    @classmethod
    def rendering_options(cls) -> Dict[str, Any]:
        """Default rendering options for this type."""
        return dict(cls.__dict__.get("_rendering_options", {}))

    @classmethod
    def renders_as_table(cls, **options: Any) -> None:
        """Shortcut for renders_with(TableController)."""
        from rapport.contexts.controller.builtin import TableController

        cls.renders_with(TableController, options)

    @classmethod
    def renders_as_row(cls, **options: Any) -> None:
        """Shortcut for renders_with(RowController)."""
        from rapport.contexts.controller.builtin import RowController

        cls.renders_with(RowController, options)

    @classmethod
    def renders_as_group(cls, **options: Any) -> None:
        """Shortcut for renders_with(GroupController)."""
        from rapport.contexts.controller.builtin import GroupController

        cls.renders_with(GroupController, options)

    @classmethod
    def renders_as_grouping(cls, **options: Any) -> None:
        """Shortcut for renders_with(GroupingController)."""
        from rapport.contexts.controller.builtin import GroupingController

        cls.renders_with(GroupingController, options)

    def render_as(
        self,
        format_id: Any,
        options: Optional[Mapping] = None,
        configure: Optional[Callable] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Render this object with its bound controller.

        Args:
            format_id: Format to render (must be registered on the controller)
            options: Options for this render, overriding the type's defaults
            configure: Callback receiving the controller before it runs
            **kwargs: Extra options, applied after ``options``

        Returns:
            The rendered output

        Raises:
            ControllerNotSetError: If the type never bound a controller
            UnknownFormatError: If the controller has no formatter for format_id
        """
        controller = type(self).controller()
        if controller is None:
            raise ControllerNotSetError(type(self).__name__)
        if not controller.registry.has_format(format_id):
            raise UnknownFormatError(format_id, controller.formats())

        merged = type(self).rendering_options()
        merged.update(Options(options).to_dict() if options is not None else {})
        merged.update(kwargs)
        if hasattr(self, "renderable_data"):
            merged["data"] = self.renderable_data(format_id)
        else:
            merged["data"] = self

        return controller.render(format_id, merged, configure=configure)

    def save_as(
        self,
        path: Union[str, Path],
        options: Optional[Mapping] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Render to a file, picking the format from its extension.

        Example:
            table.save_as("report.csv")  # same as render_as("csv", file="report.csv")

        Raises:
            FormatNotDetectedError: If the file name has no extension
        """
        format_id = Path(path).suffix[1:]
        if not format_id:
            raise FormatNotDetectedError(path)

        merged = Options(options).to_dict() if options is not None else {}
        merged.update(kwargs)
        merged["file"] = str(path)
        return self.render_as(format_id, merged)
