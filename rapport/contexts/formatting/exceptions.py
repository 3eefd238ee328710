"""Custom exceptions for the formatting context."""

from typing import List, Optional


class PDFCompilationError(Exception):
    """
    Exception raised when the PDF formatter cannot compile its LaTeX document.

    Attributes:
        message: Error description
        errors: LaTeX errors parsed from the compiler log
        latex_snippet: The beginning of the LaTeX source that failed to compile
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        latex_snippet: Optional[str] = None,
    ):
        self.message = message
        self.errors = errors or []
        self.latex_snippet = latex_snippet

        parts = [message]

        if self.errors:
            parts.append("\nErrors:")
            parts.extend(f"  {err}" for err in self.errors[:5])

        if latex_snippet:
            # Truncate snippet if too long
            snippet = latex_snippet[:200] + "..." if len(latex_snippet) > 200 else latex_snippet
            parts.append(f"\nLaTeX source:\n{snippet}")

        super().__init__("\n".join(parts))
