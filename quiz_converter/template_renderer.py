"""Render quiz items through a user-supplied Jinja2 template.

Template context:
- `items`: list of dicts with question/answer/spell/comments/criteria

Helpers available as globals, e.g. `{{ formatCriteria(item.criteria) }}`:
formatCriteria, addQuotes, join, upper, lower, replace, add, len, now.
formatCriteria and addQuotes are also registered as filters.
"""

from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

import jinja2

from .criteria import add_quotes_if_needed, format_criteria
from .records import QuizDataError, QuizItem


LOGGER = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y年%m月%d日 %H:%M:%S"

Clock = Callable[[], datetime]


class TemplateRenderError(QuizDataError):
    """Raised when a template cannot be parsed or rendered."""


def _join(items: Iterable[Any], sep: str = "") -> str:
    return sep.join(str(x) for x in items)


def _replace(text: str, old: str, new: str) -> str:
    return str(text).replace(old, new)


def _add(a: int, b: int) -> int:
    return a + b


def build_environment(clock: Clock | None = None, timestamp_format: str = TIMESTAMP_FORMAT) -> jinja2.Environment:
    """Create the template environment.

    `clock` defaults to `datetime.now`; tests pass a fixed one.
    """
    now_fn = clock or datetime.now

    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.globals.update(
        {
            "formatCriteria": format_criteria,
            "addQuotes": add_quotes_if_needed,
            "join": _join,
            "upper": lambda s: str(s).upper(),
            "lower": lambda s: str(s).lower(),
            "replace": _replace,
            "add": _add,
            "len": len,
            "now": lambda: now_fn().strftime(timestamp_format),
        }
    )
    env.filters["formatCriteria"] = format_criteria
    env.filters["addQuotes"] = add_quotes_if_needed
    return env


def render_template(
    items: Sequence[QuizItem],
    template_text: str,
    clock: Clock | None = None,
    timestamp_format: str = TIMESTAMP_FORMAT,
) -> str:
    env = build_environment(clock=clock, timestamp_format=timestamp_format)
    try:
        template = env.from_string(template_text)
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateRenderError(f"failed to parse template (line {exc.lineno}): {exc.message}") from exc

    try:
        return template.render(items=[item.to_template_dict() for item in items])
    except jinja2.TemplateError as exc:
        raise TemplateRenderError(f"failed to execute template: {exc}") from exc


def convert_to_template(
    items: Sequence[QuizItem],
    template_file_path: str | Path,
    output_file_path: str | Path,
    clock: Clock | None = None,
    timestamp_format: str = TIMESTAMP_FORMAT,
) -> str:
    """Render `items` with the template file and write the result.

    Returns:
        str: Saved output file path.
    """
    template_path = Path(template_file_path)
    try:
        template_text = template_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateRenderError(f"failed to read template file: {exc}") from exc

    rendered = render_template(items, template_text, clock=clock, timestamp_format=timestamp_format)

    output_path = Path(output_file_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        raise QuizDataError(f"failed to create output file: {exc}") from exc

    LOGGER.info("Saved template output=%s template=%s count=%d", output_path, template_path, len(items))
    return str(output_path)
