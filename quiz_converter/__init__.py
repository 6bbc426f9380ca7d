"""Core module exports for quiz_converter."""

from .converter import convert
from .criteria import add_quotes_if_needed, format_criteria, format_criteria_section
from .csv_writer import build_rows, write_csv
from .file_rules import OutputFormat, builtin_template_path, detect_output_format
from .records import QuizDataError, QuizItem, load_yaml_data
from .template_renderer import TemplateRenderError, convert_to_template, render_template
from .validator import ValidationResult, validate_items, validate_yaml_file

__all__ = [
    "OutputFormat",
    "QuizDataError",
    "QuizItem",
    "TemplateRenderError",
    "ValidationResult",
    "add_quotes_if_needed",
    "build_rows",
    "builtin_template_path",
    "convert",
    "convert_to_template",
    "detect_output_format",
    "format_criteria",
    "format_criteria_section",
    "load_yaml_data",
    "render_template",
    "validate_items",
    "validate_yaml_file",
    "write_csv",
]
