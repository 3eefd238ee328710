"""
Stage Registry

Per-controller pipeline shape: which hooks a formatter is asked to run, in what
order, which options must be set, the default options, and which formatter class
handles each format.

A registry is filled in once, while its controller class is being declared, and
is read-only afterwards. Subclasses start from a copy of their parent's registry
(see inherit()), so extending a controller never mutates the parent.
"""

from typing import Any, Callable, Dict, List, Optional

from rapport.contexts.controller.exceptions import StageAlreadyDefinedError
from rapport.contexts.controller.options import Options, normalize_key


class StageRegistry:
    """
    Pipeline configuration for one controller class.

    Attributes:
        prepare_stage: Name used for the prepare_<name> hook (or None)
        stages: Ordered build stage names used for build_<name> hooks
        finalize_stage: Name used for the finalize_<name> hook (or None)
        required_options: Option names that must be set before any hook runs
        formats: Format id -> formatter class
    """

    def __init__(self):
        self.prepare_stage: Optional[str] = None
        self.stages: List[str] = []
        self.finalize_stage: Optional[str] = None
        self.required_options: List[str] = []
        self.formats: Dict[str, type] = {}
        self._options: Optional[Options] = None
        # Tracks declarations made on this registry itself, not inherited ones
        self._prepare_declared = False
        self._finalize_declared = False

    def inherit(self) -> "StageRegistry":
        """
        Create the registry for a subclass.

        Stage lists, required options and formats are copied and the default
        options duplicated. Inherited prepare/finalize names carry over but the
        subclass may still declare its own once.
        """
        child = StageRegistry()
        child.prepare_stage = self.prepare_stage
        child.stages = list(self.stages)
        child.finalize_stage = self.finalize_stage
        child.required_options = list(self.required_options)
        child.formats = dict(self.formats)
        child._options = self._options.copy() if self._options is not None else None
        return child

    @property
    def options(self) -> Options:
        """Default options for the controller (created on first access)."""
        return self.declare_options()

    def declare_options(self, configurator: Optional[Callable[[Options], Any]] = None) -> Options:
        """
        Return the default options, creating them on first use.

        Args:
            configurator: Optional callable receiving the options to mutate

        Returns:
            The same Options instance on every call
        """
        if self._options is None:
            self._options = Options()
        if configurator is not None:
            configurator(self._options)
        return self._options

    def declare_prepare(self, name: Any) -> None:
        if self._prepare_declared:
            raise StageAlreadyDefinedError("prepare", normalize_key(name), self.prepare_stage)
        self.prepare_stage = normalize_key(name)
        self._prepare_declared = True

    def declare_stages(self, *names: Any) -> None:
        # Duplicates are kept on purpose: each occurrence runs its hook again
        self.stages.extend(normalize_key(name) for name in names)

    def declare_finalize(self, name: Any) -> None:
        if self._finalize_declared:
            raise StageAlreadyDefinedError("finalize", normalize_key(name), self.finalize_stage)
        self.finalize_stage = normalize_key(name)
        self._finalize_declared = True

    def declare_required_options(self, *names: Any) -> List[str]:
        """Append required option names and return them normalized."""
        added = [normalize_key(name) for name in names]
        self.required_options.extend(added)
        return added

    def register_format(self, format_id: Any, formatter_cls: type) -> None:
        """Map a format id to a formatter class. A later registration replaces an earlier one."""
        self.formats[normalize_key(format_id)] = formatter_cls

    def lookup_format(self, format_id: Any) -> Optional[type]:
        return self.formats.get(normalize_key(format_id))

    def has_format(self, format_id: Any) -> bool:
        return normalize_key(format_id) in self.formats
