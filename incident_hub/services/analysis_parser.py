"""
Parsing of free-text model replies into a cause and a solution.

The model is asked for two labelled sections but does not always comply,
so extraction falls through three passes:

1. line scan for the "Possible Cause" / "Suggested Solution" labels
2. split on blank lines and take the first two sections
3. fixed placeholders

The result never contains an empty field.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from incident_hub.core.constants import (
    CAUSE_LABEL,
    CAUSE_PLACEHOLDER,
    SOLUTION_LABEL,
    SOLUTION_PLACEHOLDER,
)

_BLANK_LINE = re.compile(r"\n\s*\n")


class ParsedAnalysis(NamedTuple):
    cause: str
    solution: str


def _clean(value: str) -> str:
    # Markdown emphasis around labels ("**Possible Cause:** ...") leaks into values.
    return value.strip().strip("*").strip()


def _scan_for_label(lines: list[str], label: str) -> str:
    """
    Value following ``label`` on its line, or the next line if that is empty.

    Only the first line carrying the label counts. Later repeats, such as a
    model restating its answer in a summary, are ignored rather than
    overwriting the earlier value.
    """
    needle = label.lower()
    for i, raw in enumerate(lines):
        line = raw.strip()
        if needle not in line.lower():
            continue
        _, _, after = line.partition(":")
        value = _clean(after)
        if not value and i + 1 < len(lines):
            value = _clean(lines[i + 1])
        return value
    return ""


def _sections(text: str) -> list[str]:
    return [s for s in _BLANK_LINE.split(text.strip()) if s.strip()]


def parse_analysis(raw_text: str) -> ParsedAnalysis:
    """
    Extract (cause, solution) from a completion response.

    Example:
        >>> parse_analysis("Possible Cause: X\\n\\nSuggested Solution: Y")
        ParsedAnalysis(cause='X', solution='Y')
    """
    text = (raw_text or "").replace("\r\n", "\n")
    lines = text.split("\n")

    cause = _scan_for_label(lines, CAUSE_LABEL)
    solution = _scan_for_label(lines, SOLUTION_LABEL)

    if not cause or not solution:
        sections = _sections(text)
        if len(sections) >= 2:
            if not cause:
                cause = _clean(sections[0].replace(f"{CAUSE_LABEL}:", ""))
            if not solution:
                solution = _clean(sections[1].replace(f"{SOLUTION_LABEL}:", ""))

    return ParsedAnalysis(
        cause=cause or CAUSE_PLACEHOLDER,
        solution=solution or SOLUTION_PLACEHOLDER,
    )
