"""CSV export: one row per quiz item with the formatted judgement string."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Sequence

from .criteria import format_criteria
from .records import QuizDataError, QuizItem


LOGGER = logging.getLogger(__name__)

CSV_FIELDNAMES = ["question", "answer", "spell", "criteria"]


def build_rows(items: Sequence[QuizItem]) -> list[dict[str, str]]:
    return [
        {
            "question": item.question,
            "answer": item.answer,
            "spell": item.spell,
            "criteria": format_criteria(item.criteria),
        }
        for item in items
    ]


def write_csv(items: Sequence[QuizItem], csv_path: str | Path, encoding: str = "utf-8") -> str:
    """Write quiz items to CSV and return the saved path.

    Use encoding="utf-8-sig" when the file is meant for Excel.
    """
    path = Path(csv_path)
    rows = build_rows(items)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding=encoding, newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDNAMES)
            writer.writeheader()
            writer.writerows(rows)
    except (OSError, LookupError, UnicodeError) as exc:
        raise QuizDataError(f"failed to write CSV file: {exc}") from exc

    LOGGER.info("Saved csv=%s count=%d", path, len(rows))
    return str(path)
