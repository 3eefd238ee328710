"""Custom exceptions for the controller context."""

from pathlib import Path
from typing import Iterable, Optional, Union


class ControllerError(Exception):
    """Base class for every failure raised by the rendering pipeline."""


class RequiredOptionNotSetError(ControllerError):
    """
    Raised when a declared required option has no value at render time.

    Attributes:
        option: Name of the missing option
        controller_name: Name of the controller that declared it
    """

    def __init__(self, option: str, controller_name: Optional[str] = None):
        self.option = option
        self.controller_name = controller_name

        message = f"Required option {option} not set"
        if controller_name:
            message += f" (controller: {controller_name})"

        super().__init__(message)


class UnknownFormatError(ControllerError):
    """
    Raised when a format is not registered on a controller, or the registered
    formatter cannot be instantiated.

    Attributes:
        format_id: The requested format
        available: Formats registered on the controller at the time of the request
    """

    def __init__(self, format_id, available: Optional[Iterable[str]] = None):
        self.format_id = format_id
        self.available = sorted(available) if available is not None else []

        parts = [f"Unknown format: {format_id!r}"]
        if available is not None:
            listed = ", ".join(self.available) if self.available else "(none)"
            parts.append(f"Available: {listed}")

        super().__init__(". ".join(parts))


class FormatNotDetectedError(UnknownFormatError):
    """
    Raised by save_as() when no format can be derived from the file name.

    Attributes:
        path: The path that has no extension
    """

    def __init__(self, path: Union[str, Path]):
        self.path = path
        self.format_id = None
        self.available = []
        ControllerError.__init__(self, f"Cannot detect a format from file name: {path}")


class StageAlreadyDefinedError(ControllerError):
    """
    Raised when a controller declares a second prepare or finalize stage.

    This is a declaration-time programming error, never a render-time one.

    Attributes:
        kind: "prepare" or "finalize"
        name: The stage name that was being declared
        existing: The stage name already declared
    """

    def __init__(self, kind: str, name: str, existing: Optional[str] = None):
        self.kind = kind
        self.name = name
        self.existing = existing

        message = f"{kind} stage already defined"
        if existing is not None:
            message += f" ({existing!r}, cannot also declare {name!r})"

        super().__init__(message)


class ControllerNotSetError(ControllerError):
    """
    Raised when a data type renders without ever binding a controller.

    Attributes:
        type_name: Name of the data type
    """

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(
            f"{type_name} has no controller. Bind one with renders_with() "
            "or a renders_as_* shortcut"
        )
