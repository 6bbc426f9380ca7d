"""Conversion entry point: quiz YAML -> CSV or template output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .csv_writer import write_csv
from .file_rules import OutputFormat, detect_output_format
from .records import QuizDataError, load_yaml_data
from .template_renderer import TIMESTAMP_FORMAT, Clock, convert_to_template


LOGGER = logging.getLogger(__name__)


def _cfg_get(cfg: dict[str, Any], path: str, default: Any) -> Any:
    cur: Any = cfg
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def convert(
    yaml_file_path: str | Path,
    output_file_path: str | Path,
    template_file_path: str | Path | None = None,
    *,
    cfg: dict[str, Any] | None = None,
    clock: Clock | None = None,
) -> str:
    """Convert a quiz YAML file and return the written output path.

    The format comes from `detect_output_format`: a template always wins,
    otherwise a `.csv` output name selects CSV. Any other output without a
    template is an error.
    """
    cfg = cfg or {}
    fmt = detect_output_format(output_file_path, template_file_path)
    LOGGER.info("Convert input=%s output=%s format=%s", yaml_file_path, output_file_path, fmt.value)

    if fmt is OutputFormat.CSV:
        items = load_yaml_data(yaml_file_path)
        encoding = str(_cfg_get(cfg, "csv.encoding", "utf-8") or "utf-8")
        return write_csv(items, output_file_path, encoding=encoding)

    if not template_file_path:
        raise QuizDataError("template file is required for non-CSV output")

    items = load_yaml_data(yaml_file_path)
    timestamp_format = str(_cfg_get(cfg, "output.timestamp_format", TIMESTAMP_FORMAT) or TIMESTAMP_FORMAT)
    return convert_to_template(
        items,
        template_file_path,
        output_file_path,
        clock=clock,
        timestamp_format=timestamp_format,
    )
