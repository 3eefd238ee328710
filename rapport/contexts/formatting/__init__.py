"""
Formatting Context

Responsibilities:
- Implements the built-in formatters (csv, text, html, pdf) as controller backends
- Registers them on the built-in controllers
- Manages formatting templates (named option presets) and page layouts
- Compiles LaTeX to PDF for the pdf format

Owns: Output formats, templates, layouts, PDF compilation
Never: Decides pipeline order or validates options (controllers do)
"""

from rapport.contexts.formatting.csv_formatter import CSVFormatter
from rapport.contexts.formatting.exceptions import PDFCompilationError
from rapport.contexts.formatting.formatter import Formatter
from rapport.contexts.formatting.html_formatter import HTMLFormatter, HTMLGroupFormatter
from rapport.contexts.formatting.pdf_formatter import PDFFormatter
from rapport.contexts.formatting.templates import Template, load_templates_from_env
from rapport.contexts.formatting.text_formatter import TextFormatter

load_templates_from_env()

__all__ = [
    "Formatter",
    "CSVFormatter",
    "TextFormatter",
    "HTMLFormatter",
    "HTMLGroupFormatter",
    "PDFFormatter",
    "Template",
    "PDFCompilationError",
]
