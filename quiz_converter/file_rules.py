"""Filename rules for choosing an output format and built-in templates."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

BUILTIN_TEMPLATES = {
    "html": "quiz_template.html.j2",
    "markdown": "quiz_template.md.j2",
    "md": "quiz_template.md.j2",
}


class OutputFormat(str, Enum):
    CSV = "csv"
    TEMPLATE = "template"


def detect_output_format(output_file: str | Path, template_file: str | Path | None = None) -> OutputFormat:
    """Template wins when given; otherwise `.csv` (any case) means CSV."""
    if template_file:
        return OutputFormat.TEMPLATE
    if Path(output_file).suffix.lower() == ".csv":
        return OutputFormat.CSV
    return OutputFormat.TEMPLATE


def builtin_template_path(format_name: str) -> Path:
    name = format_name.lower().strip()
    if name not in BUILTIN_TEMPLATES:
        supported = ", ".join(sorted(BUILTIN_TEMPLATES))
        raise ValueError(f"No built-in template for format: {format_name} (supported: {supported})")
    return TEMPLATES_DIR / BUILTIN_TEMPLATES[name]
