"""
Layout Registry

Loads and caches the Jinja2 layouts formatters wrap their output in.
"""

from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

LAYOUTS_PATH = Path(__file__).parent / "layouts"


class LayoutRegistry:
    """
    Registry for loading and caching Jinja2 layouts.

    Layouts are stored in {base_path}/{name}.jinja. LaTeX layouts use custom
    delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, base_path: Path, latex_delimiters: bool = False):
        """
        Initialize the layout registry.

        Args:
            base_path: Directory containing the layout files
            latex_delimiters: Use LaTeX-safe delimiters instead of Jinja2's defaults
        """
        self.base_path = base_path
        self._cache: Dict[str, Template] = {}

        delimiters = {}
        if latex_delimiters:
            delimiters = dict(
                variable_start_string="<<<",
                variable_end_string=">>>",
                block_start_string="<%%",
                block_end_string="%%>",
                comment_start_string="<#",
                comment_end_string="#>",
            )

        self.env = Environment(
            loader=FileSystemLoader(str(base_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            **delimiters,
        )

    def get_layout(self, name: str) -> Template:
        """
        Get a layout by name, loading and caching it if necessary.

        Args:
            name: Layout name (file name without the .jinja suffix)

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If layout file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        try:
            layout = self.env.get_template(f"{name}.jinja")
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Layout '{name}' not found at {self.get_layout_path(name)}"
            ) from e

        self._cache[name] = layout
        return layout

    def get_layout_path(self, name: str) -> Path:
        return self.base_path / f"{name}.jinja"

    def render(self, layout_name: str, /, **context) -> str:
        """Render a layout with the given context."""
        return self.get_layout(layout_name).render(**context)

    def clear_cache(self):
        """Clear the layout cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache


_html_layouts: Optional[LayoutRegistry] = None
_latex_layouts: Optional[LayoutRegistry] = None


def html_layouts() -> LayoutRegistry:
    """Shared registry for the built-in HTML layouts."""
    global _html_layouts
    if _html_layouts is None:
        _html_layouts = LayoutRegistry(LAYOUTS_PATH / "html")
    return _html_layouts


def latex_layouts() -> LayoutRegistry:
    """Shared registry for the built-in LaTeX layouts."""
    global _latex_layouts
    if _latex_layouts is None:
        _latex_layouts = LayoutRegistry(LAYOUTS_PATH / "latex", latex_delimiters=True)
    return _latex_layouts
