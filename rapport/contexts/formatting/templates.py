"""
Formatting Templates

Named bundles of option defaults that formatters apply before building output.
Templates are composable: a template may name a base template whose options it
extends and overrides.

The template named "default" is special: when it exists, every render applies
it unless the caller passes template=False.

Examples:
    >>> Template.create("compact", show_table_headers=False)
    >>> TableController.render("text", data=table, template="compact")

    # Load templates from YAML (one top-level key per template)
    >>> Template.load(Path("config/templates.yaml"))
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from rapport.contexts.controller import Options
from rapport.contexts.formatting.logger import _log_debug, _log_info, _log_warning

load_dotenv()
TEMPLATES_PATH = os.getenv("RAPPORT_TEMPLATES_PATH")

DEFAULT_TEMPLATE_NAME = "default"


class Template:
    """
    A named set of formatting options.

    Attributes:
        name: Template name
        options: Option defaults this template provides
    """

    _templates: Dict[str, "Template"] = {}

    def __init__(self, name: str, options: Optional[Dict[str, Any]] = None, base: Optional["Template"] = None):
        self.name = name
        self.options: Dict[str, Any] = dict(base.options) if base is not None else {}
        self.options.update(options or {})

    def __repr__(self) -> str:
        return f"Template({self.name!r}, {self.options!r})"

    def apply(self, options: Options) -> None:
        """Copy this template's values into ``options`` for every key that is still unset."""
        for key, value in self.options.items():
            if options.get(key) is None:
                options.set(key, value)

    # ---- registry -------------------------------------------------------

    @classmethod
    def create(cls, name: str, base: Optional[str] = None, **options: Any) -> "Template":
        """
        Create and register a template, replacing any template with the same name.

        Args:
            name: Template name ("default" makes it the process-wide default)
            base: Name of a registered template to extend
            **options: Option values the template provides

        Raises:
            ValueError: If ``base`` names a template that is not registered
        """
        parent = None
        if base is not None:
            parent = cls._templates.get(base)
            if parent is None:
                raise ValueError(f"Base template '{base}' not found. Available: {cls.names()}")

        template = cls(name, options, base=parent)
        cls._templates[name] = template
        return template

    @classmethod
    def get(cls, name: str) -> Optional["Template"]:
        return cls._templates.get(name)

    @classmethod
    def default(cls) -> Optional["Template"]:
        """The template named "default", if one has been registered."""
        return cls._templates.get(DEFAULT_TEMPLATE_NAME)

    @classmethod
    def names(cls) -> List[str]:
        return sorted(cls._templates)

    @classmethod
    def remove(cls, name: str) -> None:
        cls._templates.pop(name, None)

    @classmethod
    def clear(cls) -> None:
        """Remove all registered templates."""
        cls._templates.clear()

    @classmethod
    def load(cls, config_path: Path) -> List["Template"]:
        """
        Load templates from a YAML file and register them.

        Each top-level key is a template name mapping to its options. A
        ``base`` key inside a template names the template it extends; bases
        must appear earlier in the file or already be registered.

        Example YAML:
            default:
              show_table_headers: true
            compact:
              base: default
              show_table_headers: false

        Args:
            config_path: Path to the YAML file

        Returns:
            The templates that were registered, in file order
        """
        config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

        loaded = []
        for name, settings in (config or {}).items():
            settings = dict(settings or {})
            base = settings.pop("base", None)
            loaded.append(cls.create(str(name), base=base, **settings))
            _log_debug(f"Loaded template '{name}' from {config_path}")

        _log_info(f"Loaded {len(loaded)} templates from {config_path}")
        return loaded


def load_templates_from_env() -> List[Template]:
    """Load templates from RAPPORT_TEMPLATES_PATH when it points to an existing file."""
    if not TEMPLATES_PATH:
        return []
    path = Path(TEMPLATES_PATH)
    if not path.exists():
        _log_warning(f"RAPPORT_TEMPLATES_PATH set but not found: {path}")
        return []
    return Template.load(path)
