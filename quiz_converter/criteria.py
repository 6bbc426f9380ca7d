"""Judgement-string rules for quiz answers.

Display convention:
- every answer variant is wrapped in corner brackets 「...」
- sections are ordered ok -> ng -> repeat
- sections are joined with a full-width slash

Example: 「別解1」「別解2」／「誤答1」は誤答／「もう一度1」はもう一度
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

OPEN_BRACKET = "「"
CLOSE_BRACKET = "」"
SECTION_SEPARATOR = "／"

VALID_CRITERIA_KEYS = ("ok", "ng", "repeat")

# (category, suffix) in display order.
CRITERIA_SECTIONS: tuple[tuple[str, str], ...] = (
    ("ok", ""),
    ("ng", "は誤答"),
    ("repeat", "はもう一度"),
)


def add_quotes_if_needed(item: str) -> str:
    """Wrap `item` in corner brackets unless it already carries them.

    - starts with 「 and ends with 」: unchanged
    - starts with 「 only: unchanged if 」 appears anywhere (「美術館」（おまけ）),
      otherwise 」 is appended
    - ends with 」 only: 「 is prepended
    - neither: both are added
    """
    if item.startswith(OPEN_BRACKET) and item.endswith(CLOSE_BRACKET):
        return item
    if item.startswith(OPEN_BRACKET):
        if CLOSE_BRACKET in item:
            return item
        return item + CLOSE_BRACKET
    if item.endswith(CLOSE_BRACKET):
        return OPEN_BRACKET + item
    return OPEN_BRACKET + item + CLOSE_BRACKET


def format_criteria_section(items: Iterable[str], suffix: str) -> str:
    quoted = [add_quotes_if_needed(item) for item in items]
    if not quoted:
        return ""
    return "".join(quoted) + suffix


def format_criteria(criteria: Mapping[str, Iterable[str]] | None) -> str:
    """Build the judgement string for one quiz item.

    Keys outside ok/ng/repeat are ignored here; reporting them is the
    validator's job.
    """
    if not criteria:
        return ""

    parts: list[str] = []
    for key, suffix in CRITERIA_SECTIONS:
        section = format_criteria_section(criteria.get(key) or (), suffix)
        if section:
            parts.append(section)
    return SECTION_SEPARATOR.join(parts)
