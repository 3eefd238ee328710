"""
Controller Context

Responsibilities:
- Declares per-controller pipeline shapes (stages, required options, defaults, formats)
- Drives a formatter through the render lifecycle
- Shares one Options bag between controller and formatter
- Lets arbitrary data types render themselves through a bound controller (Hooks)

Owns: Render orchestration, option handling, format registry
Never: Produces formatted output itself (formatters do)
"""

from rapport.contexts.controller.builtin import (
    GroupController,
    GroupingController,
    RowController,
    TableController,
)
from rapport.contexts.controller.controller import Controller
from rapport.contexts.controller.exceptions import (
    ControllerError,
    ControllerNotSetError,
    FormatNotDetectedError,
    RequiredOptionNotSetError,
    StageAlreadyDefinedError,
    UnknownFormatError,
)
from rapport.contexts.controller.hooks import Hooks
from rapport.contexts.controller.options import Options
from rapport.contexts.controller.stage_registry import StageRegistry

__all__ = [
    # Orchestration
    "Controller",
    "StageRegistry",
    "Options",
    "Hooks",
    # Built-in controllers
    "TableController",
    "RowController",
    "GroupController",
    "GroupingController",
    # Errors
    "ControllerError",
    "RequiredOptionNotSetError",
    "UnknownFormatError",
    "FormatNotDetectedError",
    "StageAlreadyDefinedError",
    "ControllerNotSetError",
]
