"""
Controller

Core of the formatting system: a controller class declares the shape of a
rendering pipeline (stages, required options, default options, formats) and
drives a formatter through it.

Declaring a controller:

    class ReportController(Controller):
        default_options = {"show_totals": True}
        prepare_stage = "report"
        build_stages = ("header", "body", "footer")
        finalize_stage = "report"
        required_options = ("title",)

Rendering:

    ReportController.render("text", data=rows, title="Q3")

For the "text" format this runs, when the formatter implements them:
setup, apply_template, prepare_report, layout(...) wrapping build_header,
build_body and build_footer, finalize_report and finally finalize.
Missing hooks are skipped.
"""

import inspect
import types
from typing import Any, Callable, Dict, Mapping, Optional

from rapport.contexts.controller.exceptions import (
    RequiredOptionNotSetError,
    UnknownFormatError,
)
from rapport.contexts.controller.hooks import Hooks
from rapport.contexts.controller.logger import (
    log_hook,
    log_render_complete,
    log_render_failure,
    log_render_start,
)
from rapport.contexts.controller.options import Options
from rapport.contexts.controller.stage_registry import StageRegistry


SHORTCUT_PREFIX = "render_"


class ControllerMeta(type):
    """
    Metaclass providing render_<format> shortcuts on controller classes.

        TableController.render_csv(table, {"show_table_headers": False})

    is the same as

        TableController.render("csv", {"show_table_headers": False, "data": table})

    A mapping given as the first argument is taken as the options instead.
    """

    def __getattr__(cls, name: str) -> Any:
        if not name.startswith(SHORTCUT_PREFIX) or name == SHORTCUT_PREFIX:
            raise AttributeError(f"type object {cls.__name__!r} has no attribute {name!r}")
        format_id = name[len(SHORTCUT_PREFIX) :]

        def shortcut(data: Any = None, options: Optional[Mapping] = None, configure=None, **kwargs: Any):
            # Renderable mappings such as Grouping are data, not options
            if isinstance(data, (Mapping, Options)) and not isinstance(data, Hooks):
                return cls.render(format_id, data, configure=configure, **kwargs)
            merged = Options(options) if options is not None else Options()
            merged.set("data", data)
            return cls.render(format_id, merged, configure=configure, **kwargs)

        shortcut.__name__ = name
        return shortcut


class Controller(metaclass=ControllerMeta):
    """
    Base class for rendering controllers.

    Class-level configuration lives in ``registry`` (one StageRegistry per
    subclass). Instances are short-lived: one per render() call, holding the
    selected formatter, which in turn holds the data and the shared options.

    A nested ``Helpers`` class on a controller contributes extra methods to the
    formatter instance for the duration of a render.
    """

    registry: StageRegistry = StageRegistry()
    Helpers: Optional[type] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.registry = cls.registry.inherit()

        # Declarative class-body configuration
        declared = cls.__dict__
        if declared.get("default_options") is not None:
            defaults = declared["default_options"]
            cls.declare_options(lambda options: options.update(defaults))
        if declared.get("prepare_stage") is not None:
            cls.prepare(declared["prepare_stage"])
        if declared.get("build_stages"):
            cls.stage(*declared["build_stages"])
        if declared.get("finalize_stage") is not None:
            cls.finalize(declared["finalize_stage"])
        if declared.get("required_options"):
            cls.required_option(*declared["required_options"])

    def __init__(self):
        self.format = None
        self._formatter = None

    # ------------------------------------------------------------------
    # Declaration API
    # ------------------------------------------------------------------

    @classmethod
    def declare_options(cls, configurator: Optional[Callable[[Options], Any]] = None) -> Options:
        """
        Class-wide default options.

        Example:
            ReportController.declare_options(lambda o: o.set("style", "justified"))
        """
        return cls.registry.declare_options(configurator)

    @classmethod
    def prepare(cls, stage: Any) -> None:
        """Register the prepare_<stage> hook. Raises StageAlreadyDefinedError if already set."""
        cls.registry.declare_prepare(stage)

    @classmethod
    def stage(cls, *stages: Any) -> None:
        """Append build_<stage> hooks, run in declaration order."""
        cls.registry.declare_stages(*stages)

    @classmethod
    def finalize(cls, stage: Any) -> None:
        """Register the finalize_<stage> hook. Raises StageAlreadyDefinedError if already set."""
        cls.registry.declare_finalize(stage)

    @classmethod
    def required_option(cls, *names: Any) -> None:
        """
        Declare options that must be set at render time.

        Each name also becomes a property on the controller that reads and
        writes the shared options, unless the class already defines it.
        """
        for name in cls.registry.declare_required_options(*names):
            if name not in cls.__dict__:
                setattr(cls, name, _option_property(name))

    @classmethod
    def add_format(cls, formatter_cls: type, name: Any) -> None:
        """Register a formatter class for a format. Re-registering a format replaces it."""
        cls.registry.register_format(name, formatter_cls)

    @classmethod
    def formats(cls) -> Dict[str, type]:
        """Formats registered on this controller, keyed by format id."""
        return cls.registry.formats

    @classmethod
    def built_in_formats(cls) -> Dict[str, type]:
        """
        Format ids mapped to the built-in formatter classes.

        Override to extend or replace the set used by define_formatter():

            @classmethod
            def built_in_formats(cls):
                return {**super().built_in_formats(), "xml": XMLFormatter}
        """
        from rapport.contexts.formatting import (
            CSVFormatter,
            HTMLFormatter,
            PDFFormatter,
            TextFormatter,
        )

        return {
            "html": HTMLFormatter,
            "csv": CSVFormatter,
            "pdf": PDFFormatter,
            "text": TextFormatter,
        }

    @classmethod
    def define_formatter(cls, format_id: Any, base: Optional[type] = None):
        """
        Class decorator that turns a class body into a formatter for this controller.

        The decorated class is layered over ``base`` (or the built-in formatter
        for ``format_id``) and registered under ``format_id``.

        Example:
            @ReportController.define_formatter("text")
            class ReportText:
                def build_body(self):
                    self.output.write("Hello world")

            @ReportController.define_formatter("custom", base=CustomFormatter)
            class ReportCustom:
                ...
        """

        def decorator(body: type) -> type:
            parent = base
            if parent is None:
                built_in = cls.built_in_formats()
                if str(format_id) not in built_in:
                    raise UnknownFormatError(format_id, built_in)
                parent = built_in[str(format_id)]
            formatter_cls = type(
                body.__name__,
                (body, parent),
                {"__module__": body.__module__, "__qualname__": body.__qualname__},
            )
            cls.add_format(formatter_cls, format_id)
            return formatter_cls

        return decorator

    @classmethod
    def use_default_template(cls) -> bool:
        """Whether a process-wide default formatting template is available."""
        from rapport.contexts.formatting.templates import Template

        return Template.default() is not None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @classmethod
    def render(
        cls,
        format_id: Any,
        options: Optional[Mapping] = None,
        configure: Optional[Callable[["Controller"], Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Render with the formatter registered for ``format_id``.

        Steps:
          * Build a controller, select the formatter and bind data and options.
          * Mix the controller's Helpers into the formatter, if any.
          * Call ``configure(controller)`` if given.
          * Call setup() on the controller, then on the formatter, if defined.
          * Run the pipeline.
          * Append the output to ``options.file`` if set.

        Args:
            format_id: Format to render (e.g. "csv")
            options: Options for this render; a "data" entry becomes the data
            configure: Callback receiving the controller before it runs
            **kwargs: Extra options, applied after ``options``

        Returns:
            The formatter's output (a string, the ``io`` sink, or bytes)
        """
        try:
            rend = cls._build(format_id, options, **kwargs)
            log_render_start(cls.__name__, rend.format, rend.options)
            if configure is not None:
                configure(rend)
            rend._maybe_call(rend, "setup")
            rend._maybe_call(rend.formatter, "setup")
            rend.run()
            if rend.options.file:
                rend.formatter.save_output(rend.options.file)
        except Exception as e:
            log_render_failure(cls.__name__, format_id, e)
            raise
        log_render_complete(cls.__name__, rend.format, rend.options.file)
        return rend.formatter.rendered_output()

    @classmethod
    def _build(cls, format_id: Any, options: Optional[Mapping] = None, **kwargs: Any) -> "Controller":
        """Create a controller instance with its formatter, options and data bound."""
        rend = cls()
        rend._use_formatter(format_id)

        # Formatter's own options < controller defaults < call-time options
        rend.options = rend.formatter.options.merge(cls.registry.options)

        if cls.Helpers is not None:
            _extend(rend.formatter, cls.Helpers)

        call_options = Options(options) if options is not None else Options()
        call_options.update(kwargs)
        data = call_options.pop("data")
        if data is not None:
            rend.data = data
        rend.options.update(call_options)

        return rend

    def run(self) -> None:
        """Run the pipeline. Override in a custom controller to add actions around it."""
        self._run()

    # ------------------------------------------------------------------
    # Instance surface
    # ------------------------------------------------------------------

    @property
    def formatter(self):
        """The active formatter."""
        return self._formatter

    @formatter.setter
    def formatter(self, value) -> None:
        self._formatter = value

    @property
    def data(self) -> Any:
        """Data handed to the active formatter."""
        return self.formatter.data

    @data.setter
    def data(self, value: Any) -> None:
        self.formatter.data = value

    @property
    def options(self) -> Options:
        """Options shared with the active formatter."""
        return self.formatter.options

    @options.setter
    def options(self, value: Options) -> None:
        self.formatter.options = value

    @property
    def io(self) -> Any:
        return self.options.io

    @io.setter
    def io(self, sink: Any) -> None:
        """Make the formatter write into ``sink`` (anything with write()) instead of a string."""
        self.options.io = sink

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(self) -> None:
        registry = type(self).registry

        self._check_required_options(registry)

        if self._responds_to("apply_template") and self.options.template is not False:
            if self.options.template or type(self).use_default_template():
                self._maybe("apply_template")

        if registry.prepare_stage:
            self._maybe(f"prepare_{registry.prepare_stage}")

        if self._responds_to("layout") and self.options.layout is not False:
            log_hook(type(self).__name__, "layout", True)
            self.formatter.layout(self._execute_stages)
        else:
            self._execute_stages()

        if registry.finalize_stage:
            self._maybe(f"finalize_{registry.finalize_stage}")
        self._maybe("finalize")

    def _check_required_options(self, registry: StageRegistry) -> None:
        for name in registry.required_options:
            if self.options.get(name) is None:
                raise RequiredOptionNotSetError(name, type(self).__name__)

    def _execute_stages(self) -> None:
        for stage in type(self).registry.stages:
            self._maybe(f"build_{stage}")

    def _responds_to(self, hook_name: str) -> bool:
        return callable(getattr(self.formatter, hook_name, None))

    def _maybe(self, hook_name: str) -> None:
        """Call a formatter hook if the formatter implements it."""
        self._maybe_call(self.formatter, hook_name)

    def _maybe_call(self, target: Any, hook_name: str) -> None:
        hook = getattr(target, hook_name, None)
        invoked = callable(hook)
        log_hook(type(self).__name__, hook_name, invoked)
        if invoked:
            hook()

    def _use_formatter(self, format_id: Any) -> None:
        """Select and instantiate the formatter registered for ``format_id``."""
        registry = type(self).registry
        formatter_cls = registry.lookup_format(format_id)
        if (
            formatter_cls is None
            or not isinstance(formatter_cls, type)
            or inspect.isabstract(formatter_cls)
        ):
            raise UnknownFormatError(format_id, registry.formats)
        self.formatter = formatter_cls()
        self.formatter.format = format_id
        self.format = format_id


def _option_property(name: str) -> property:
    """Property reading and writing ``name`` in the controller's shared options."""

    def getter(self):
        return self.options.get(name)

    def setter(self, value):
        self.options.set(name, value)

    return property(getter, setter, doc=f"Required option {name!r}.")


def _extend(formatter: Any, helpers: type) -> None:
    """Bind the plain functions defined on ``helpers`` onto a formatter instance."""
    for klass in reversed(helpers.__mro__):
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name.startswith("__"):
                continue
            if inspect.isfunction(member):
                setattr(formatter, name, types.MethodType(member, formatter))
