"""
PDF formatter.

Builds a LaTeX document while the stages run, then compiles it in finalize().
The rendered output is the PDF content as bytes; ``latex_source`` keeps the
document that was compiled.

Options:
    show_table_headers: Emit a header row (default True)
    show_group_headers: Emit group names as section headings (default True)
    title: Document heading
    font_size: Base font size in points, 10, 11 or 12 (default 10)
    margin: Page margin (default "1in")
"""

from typing import Any, List, Optional

from rapport.contexts.controller import GroupController, GroupingController, TableController
from rapport.contexts.formatting.compiler import compile_source
from rapport.contexts.formatting.exceptions import PDFCompilationError
from rapport.contexts.formatting.formatter import Formatter, cell_text, column_names_of, rows_of
from rapport.contexts.formatting.registries import latex_layouts

LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}


def latex_escape(text: str) -> str:
    """Escape LaTeX special characters in plain text."""
    return "".join(LATEX_SPECIAL_CHARS.get(char, char) for char in text)


class PDFFormatter(Formatter):
    """PDF documents for tables, groups and groupings."""

    def __init__(self):
        super().__init__()
        self.latex_source: Optional[str] = None
        self.pdf: Optional[bytes] = None

    @property
    def output(self):
        # LaTeX is always accumulated internally; the io option does not apply
        return self._buffer

    def rendered_output(self) -> Optional[bytes]:
        return self.pdf

    # ---- LaTeX helpers --------------------------------------------------

    def latex_row(self, values: List[Any], bold: bool = False) -> str:
        cells = [latex_escape(cell_text(v)) for v in values]
        if bold:
            cells = [rf"\textbf{{{c}}}" for c in cells]
        return " & ".join(cells) + r" \\" + "\n"

    def column_count(self, data: Any) -> int:
        return max([len(column_names_of(data))] + [len(row) for row in rows_of(data)])

    def write_table(self, data: Any) -> None:
        count = self.column_count(data)
        if count == 0:
            return
        columns = column_names_of(data)
        self.output.write(rf"\begin{{longtable}}{{{'l' * count}}}" + "\n")
        self.output.write("\\toprule\n")
        if self.options.show_table_headers and columns:
            self.output.write(self.latex_row(columns, bold=True))
            self.output.write("\\midrule\n")
        for row in rows_of(data):
            self.output.write(self.latex_row(row))
        self.output.write("\\bottomrule\n")
        self.output.write("\\end{longtable}\n")

    def write_group_heading(self, name: Any) -> None:
        if self.options.show_group_headers is not False:
            self.output.write(rf"\subsection*{{{latex_escape(cell_text(name))}}}" + "\n")

    # ---- table --------------------------------------------------------

    def build_table_body(self):
        self.write_table(self.data)

    # ---- group --------------------------------------------------------

    def build_group_header(self):
        self.write_group_heading(self.data.name)

    def build_group_body(self):
        self.write_table(self.data)

    # ---- grouping -----------------------------------------------------

    def build_grouping_body(self):
        for name, group in self.data.items():
            self.write_group_heading(getattr(group, "name", None) or name)
            self.write_table(group)

    # ---- document -----------------------------------------------------

    def finalize(self):
        """Compile the accumulated LaTeX into a PDF."""
        self.latex_source = latex_layouts().render(
            "document.tex",
            title=latex_escape(self.options.title) if self.options.title else "",
            font_size=self.options.font_size or 10,
            margin=self.options.margin or "1in",
            body=self._buffer.getvalue(),
        )
        result = compile_source(self.latex_source)
        if not result.success:
            raise PDFCompilationError(
                "PDF compilation failed", errors=result.errors, latex_snippet=self.latex_source
            )
        self.pdf = result.pdf_bytes


PDFFormatter.renders("pdf", controllers=[TableController, GroupController, GroupingController])
