"""
LaTeX Compilation Module

Compiles LaTeX sources to PDF for the PDF formatter.
"""

import os
import re
import shutil
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from PyPDF2 import PdfReader

from rapport.contexts.formatting.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "xelatex")
LATEX_PASSES = int(os.getenv("LATEX_PASSES", "2"))
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"

# LaTeX intermediate files created during compilation
LATEX_ARTIFACTS = [".aux", ".log", ".out", ".toc"]


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether compilation succeeded
        pdf_path: Path to generated PDF (None if failed or compiled in a temporary directory)
        pdf_bytes: Content of the generated PDF (None if failed)
        stdout: Standard output from the compiler
        stderr: Standard error from the compiler
        errors: List of parsed LaTeX errors
        warnings: List of parsed LaTeX warnings
        page_count: Number of pages in generated PDF (None if not available)
    """

    success: bool
    pdf_path: Optional[Path] = None
    pdf_bytes: Optional[bytes] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def compiler_available(compiler: str = LATEX_COMPILER) -> bool:
    return shutil.which(compiler) is not None


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def _parse_latex_log(log_content: str) -> tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    # Additional error patterns that don't start with "!"
    additional_error_patterns = [
        r"Undefined control sequence",
        r"File ended while scanning use of",
        r"Emergency stop",
    ]
    for pattern in additional_error_patterns:
        match = re.search(rf"({pattern}.*?)$", log_content, re.MULTILINE)
        if match and match.group(1) not in errors:
            errors.append(match.group(1))

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]
    for pattern in warning_patterns:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    """Remove intermediate LaTeX files next to ``tex_path``."""
    for ext in LATEX_ARTIFACTS:
        artifact_path = tex_path.with_suffix(ext)
        if artifact_path.exists():
            artifact_path.unlink()


def compile_latex(
    tex_file: Path,
    num_passes: int = LATEX_PASSES,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
    compiler: str = LATEX_COMPILER,
) -> CompilationResult:
    """
    Compile a LaTeX file to PDF in the file's own directory.

    Args:
        tex_file: Path to the .tex file to compile
        num_passes: Number of compiler passes (default: 2 for cross-references)
        keep_artifacts: Keep intermediate files (default: from KEEP_LATEX_ARTIFACTS env)
        compiler: LaTeX executable (default: from LATEX_COMPILER env)

    Returns:
        CompilationResult with success status and diagnostic information
    """
    if not compiler_available(compiler):
        return CompilationResult(success=False, errors=[f"LaTeX compiler not found: {compiler}"])

    compile_dir = tex_file.parent
    log_compilation_start(tex_file, num_passes, compile_dir)
    start_time = time.time()

    # Clean any existing output files to ensure unambiguous success detection
    for ext in [".pdf"] + LATEX_ARTIFACTS:
        old_file = tex_file.with_suffix(ext)
        if old_file.exists():
            old_file.unlink()

    all_stdout = []
    all_stderr = []
    success = True

    # Multiple passes needed for longtable column widths and references
    for _ in range(num_passes):
        result = subprocess.run(
            [compiler, "-interaction=nonstopmode", "-file-line-error", tex_file.name],
            cwd=compile_dir,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        all_stdout.append(result.stdout)
        all_stderr.append(result.stderr)

        if result.returncode != 0:
            success = False
            break

    errors: List[str] = []
    warnings: List[str] = []
    log_file = tex_file.with_suffix(".log")
    if log_file.exists():
        # LaTeX writes log files in latin-1 encoding
        errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

    pdf_path = tex_file.with_suffix(".pdf")
    if not pdf_path.exists():
        success = False
        if not errors:
            errors.append("PDF file was not generated")
    elif not errors:
        # PDF exists and no LaTeX errors found: non-zero exit codes from warnings are fine
        success = True

    if not keep_artifacts:
        _remove_artifacts(tex_file)

    compilation = CompilationResult(
        success=success,
        pdf_path=pdf_path if pdf_path.exists() else None,
        pdf_bytes=pdf_path.read_bytes() if pdf_path.exists() else None,
        stdout="\n".join(all_stdout),
        stderr="\n".join(all_stderr),
        errors=errors,
        warnings=warnings,
        page_count=page_count(pdf_path) if pdf_path.exists() else None,
    )
    log_compilation_result(compilation, time.time() - start_time)
    return compilation


def compile_source(
    source: str,
    name: str = "report",
    num_passes: int = LATEX_PASSES,
    compiler: str = LATEX_COMPILER,
) -> CompilationResult:
    """
    Compile LaTeX source held in memory, in a temporary directory.

    The PDF content is returned in ``pdf_bytes``; ``pdf_path`` is None because
    the directory is removed afterwards.
    """
    with tempfile.TemporaryDirectory(prefix="rapport_") as tmp:
        tex_file = Path(tmp) / f"{name}.tex"
        tex_file.write_text(source, encoding="utf-8")
        _log_debug(f"Wrote LaTeX source ({len(source)} chars) to {tex_file}")
        result = compile_latex(tex_file, num_passes=num_passes, keep_artifacts=False, compiler=compiler)
    result.pdf_path = None
    return result
