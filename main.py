"""Quiz YAML converter CLI.

Examples:
    python main.py --input quiz.yaml --output quiz.csv
    python main.py --input quiz.yaml --output quiz.html --format html
    python main.py --input quiz.yaml --output quiz.md --format markdown
    python main.py --input quiz.yaml --output custom.txt --template my_template.j2
    python main.py --input quiz.yaml --validate
"""

from __future__ import annotations

import argparse
from copy import deepcopy
from datetime import datetime
import logging
from pathlib import Path
import sys
from typing import Any

import yaml

from quiz_converter.converter import convert
from quiz_converter.file_rules import builtin_template_path
from quiz_converter.records import QuizDataError
from quiz_converter.validator import validate_yaml_file


LOGGER = logging.getLogger("converter")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

SUPPORTED_FORMATS = ("csv", "html", "markdown", "md")

DEFAULT_CONFIG: dict[str, Any] = {
    "csv": {
        "encoding": "utf-8",
    },
    "templates": {
        "html": "",
        "markdown": "",
    },
    "output": {
        "timestamp_format": "%Y年%m月%d日 %H:%M:%S",
    },
    "paths": {
        "logs_dir": "",
    },
}


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = deepcopy(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_update(out[k], v)
        else:
            out[k] = v
    return out


def _cfg_get(cfg: dict[str, Any], path: str, default: Any) -> Any:
    cur: Any = cfg
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load YAML config and merge with defaults.

    If config file is missing or unreadable, returns hardcoded defaults.
    """

    cfg_path = Path(config_path)
    if not cfg_path.exists():
        LOGGER.debug("Config not found: %s. Using defaults.", cfg_path)
        return deepcopy(DEFAULT_CONFIG)

    try:
        loaded = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        LOGGER.warning("Failed to parse config (%s). Using defaults.", exc)
        return deepcopy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        LOGGER.warning("Config format invalid. Using defaults.")
        return deepcopy(DEFAULT_CONFIG)
    return _deep_update(DEFAULT_CONFIG, loaded)


def _resolve_template(fmt: str, cfg: dict[str, Any]) -> Path:
    key = "markdown" if fmt in ("markdown", "md") else fmt
    override = str(_cfg_get(cfg, f"templates.{key}", "") or "")
    if override:
        return Path(override)
    return builtin_template_path(fmt)


def run_validate(input_file: str) -> int:
    LOGGER.info("Validating YAML file: %s", input_file)
    result = validate_yaml_file(input_file)
    if result.is_valid:
        LOGGER.info("Validation passed: %d quiz items loaded", result.items)
        return 0

    LOGGER.error("Validation failed: %d issue(s) found", len(result.errors))
    for message in result.errors:
        LOGGER.error("  • %s", message)
    return 1


def run_convert(args: argparse.Namespace, cfg: dict[str, Any]) -> int:
    if args.template:
        out = convert(args.input, args.output, args.template, cfg=cfg)
        LOGGER.info("Template conversion done: %s + %s -> %s", args.input, args.template, out)
        return 0

    fmt = args.format.lower()
    if fmt not in SUPPORTED_FORMATS:
        LOGGER.error("Unsupported format: %s (supported: csv, html, markdown)", args.format)
        return 1

    if fmt == "csv":
        # Output name decides; a non-.csv name without a template is rejected by convert().
        out = convert(args.input, args.output, None, cfg=cfg)
    else:
        out = convert(args.input, args.output, _resolve_template(fmt, cfg), cfg=cfg)
    LOGGER.info("%s conversion done: %s -> %s", fmt.upper(), args.input, out)
    return 0


def run(args: argparse.Namespace, cfg: dict[str, Any]) -> int:
    """Dispatch validate/convert; return the process exit status."""

    if not args.input:
        LOGGER.error("Input file is not specified (--input)")
        return 1

    if args.validate:
        return run_validate(args.input)

    if not args.output:
        LOGGER.error("Output file is not specified (--output)")
        return 1

    try:
        return run_convert(args, cfg)
    except QuizDataError as exc:
        LOGGER.error("Conversion failed: %s", exc)
        return 1


def _setup_logging(cfg: dict[str, Any]) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    logs_dir = str(_cfg_get(cfg, "paths.logs_dir", "") or "")
    if logs_dir:
        log_dir_path = Path(logs_dir)
        log_dir_path.mkdir(parents=True, exist_ok=True)
        log_path = log_dir_path / f"converter_{datetime.now().strftime('%Y%m%d')}.log"
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, handlers=handlers)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Convert quiz YAML files to CSV, HTML, Markdown or a custom template")
    p.add_argument("--input", default="", help="Input quiz YAML path (required)")
    p.add_argument("--output", default="", help="Output file path (required unless --validate)")
    p.add_argument("--format", default="csv", help="Output format: csv, html, markdown")
    p.add_argument("--template", default="", help="Template file path (used regardless of --format)")
    p.add_argument("--validate", action="store_true", help="Only validate the YAML file")
    p.add_argument("--config", default="config.yaml", help="Config file path")
    return p.parse_args(argv)


if __name__ == "__main__":
    args = _parse_args()

    # Load config first with lightweight fallback logging.
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    cfg = load_config(args.config)

    # Reconfigure with optional file handler.
    for h in list(logging.getLogger().handlers):
        logging.getLogger().removeHandler(h)
    _setup_logging(cfg)

    sys.exit(run(args, cfg))
