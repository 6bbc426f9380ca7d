"""Quiz records and YAML loading.

Input shape (a top-level YAML list):

    - question: 問題文
      answer: 答え
      spell: original spelling
      comments:
        - コメント
      criteria:
        ok: [別解]
        ng: [誤答]
        repeat: [もう一度]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .criteria import VALID_CRITERIA_KEYS


LOGGER = logging.getLogger(__name__)


class QuizDataError(Exception):
    """Raised when quiz input cannot be loaded or rendered."""


# Plain scalars keep their source text ("yes", "010", "12:30"); only null is resolved.
_KEPT_IMPLICIT_TAGS = {"tag:yaml.org,2002:null", "tag:yaml.org,2002:merge"}


class QuizYAMLLoader(yaml.SafeLoader):
    pass


QuizYAMLLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in _KEPT_IMPLICIT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_text_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(_as_text(v) for v in value)
    return (_as_text(value),)


@dataclass(frozen=True)
class QuizItem:
    question: str
    answer: str
    spell: str = ""
    comments: tuple[str, ...] = ()
    criteria: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "QuizItem":
        """Build a record from one decoded YAML mapping."""
        raw_criteria = raw.get("criteria") or {}
        if not isinstance(raw_criteria, Mapping):
            raise QuizDataError(f"criteria must be a mapping, got {type(raw_criteria).__name__}")
        criteria = {str(k): _as_text_tuple(v) for k, v in raw_criteria.items()}
        return cls(
            question=_as_text(raw.get("question")),
            answer=_as_text(raw.get("answer")),
            spell=_as_text(raw.get("spell")),
            comments=_as_text_tuple(raw.get("comments")),
            criteria=MappingProxyType(criteria),
        )

    def to_template_dict(self) -> dict[str, Any]:
        """Plain values for templates; ok/ng/repeat are always present."""
        criteria: dict[str, list[str]] = {key: [] for key in VALID_CRITERIA_KEYS}
        criteria.update((k, list(v)) for k, v in self.criteria.items())
        return {
            "question": self.question,
            "answer": self.answer,
            "spell": self.spell,
            "comments": list(self.comments),
            "criteria": criteria,
        }


def parse_quiz_items(data: Any) -> list[QuizItem]:
    """Convert decoded YAML data into records."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise QuizDataError(f"quiz YAML must be a list of items, got {type(data).__name__}")

    items: list[QuizItem] = []
    for index, entry in enumerate(data, start=1):
        if not isinstance(entry, Mapping):
            raise QuizDataError(f"item {index} must be a mapping, got {type(entry).__name__}")
        items.append(QuizItem.from_dict(entry))
    return items


def load_yaml_data(yaml_file_path: str | Path) -> list[QuizItem]:
    """Load quiz records from a YAML file."""
    path = Path(yaml_file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuizDataError(f"failed to open YAML file: {exc}") from exc

    try:
        data = yaml.load(text, Loader=QuizYAMLLoader)
    except yaml.YAMLError as exc:
        raise QuizDataError(f"failed to parse YAML: {exc}") from exc

    items = parse_quiz_items(data)
    LOGGER.info("Loaded quiz YAML path=%s count=%d", path, len(items))
    return items
