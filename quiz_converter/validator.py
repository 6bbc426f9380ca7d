"""Structural checks for quiz YAML.

All issues are collected; nothing short-circuits after the first problem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .criteria import VALID_CRITERIA_KEYS
from .records import QuizDataError, QuizItem, load_yaml_data

EMPTY_DATA_MESSAGE = "YAMLファイルにクイズデータが含まれていません"


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    items: int = 0

    def add_error(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)


def _is_blank(value: str) -> bool:
    return not value.strip()


def validate_quiz_item(item: QuizItem, index: int) -> list[str]:
    """Return issue messages for one record (`index` is 1-based)."""
    errors: list[str] = []
    prefix = f"問題 {index}: "

    if _is_blank(item.question):
        errors.append(prefix + "問題文 (question) が空です")
    if _is_blank(item.answer):
        errors.append(prefix + "答え (answer) が空です")

    for key in VALID_CRITERIA_KEYS:
        for j, answer in enumerate(item.criteria.get(key, ())):
            if _is_blank(answer):
                errors.append(f"{prefix}criteria.{key}[{j}] が空です")

    allowed = ", ".join(VALID_CRITERIA_KEYS)
    for key in item.criteria:
        if key not in VALID_CRITERIA_KEYS:
            errors.append(f"{prefix}不正なcriteriaキー: '{key}' (使用可能: {allowed})")

    for j, comment in enumerate(item.comments):
        if _is_blank(comment):
            errors.append(f"{prefix}comments[{j}] が空です")

    return errors


def validate_items(items: Sequence[QuizItem]) -> ValidationResult:
    result = ValidationResult(items=len(items))
    for index, item in enumerate(items, start=1):
        for message in validate_quiz_item(item, index):
            result.add_error(message)
    if not items:
        result.add_error(EMPTY_DATA_MESSAGE)
    return result


def validate_yaml_file(yaml_file_path: str | Path) -> ValidationResult:
    """Validate a quiz YAML file without converting it."""
    path = Path(yaml_file_path)
    if not path.exists():
        result = ValidationResult()
        result.add_error(f"ファイルが存在しません: {path}")
        return result

    try:
        items = load_yaml_data(path)
    except QuizDataError as exc:
        result = ValidationResult()
        result.add_error(f"YAMLファイルの読み込みエラー: {exc}")
        return result

    return validate_items(items)
