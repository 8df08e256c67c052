"""
Inline bold tokenizer.

Splits one line into TextSpans on paired `**...**` / `__...__` markers.
"""

import re
from typing import List

from ..models import TextSpan

# Same delimiter must open and close a match
BOLD_PATTERN = re.compile(r'(\*\*|__)(.+?)\1')


def tokenize(line: str) -> List[TextSpan]:
    """
    Split a line into plain and bold spans.

    Joining the spans' content gives back the line without bold markers.
    Empty input gives no spans; empty spans are never emitted.
    """
    if not line:
        return []

    spans: List[TextSpan] = []
    cursor = 0

    for match in BOLD_PATTERN.finditer(line):
        if match.start() > cursor:
            spans.append(TextSpan(line[cursor:match.start()]))
        spans.append(TextSpan(match.group(2), bold=True))
        cursor = match.end()

    if cursor < len(line):
        spans.append(TextSpan(line[cursor:]))

    return spans or [TextSpan(line)]


def strip_bold(text: str) -> str:
    """Drop `**` markers."""
    return text.replace('**', '')


def is_fully_bold(text: str) -> bool:
    """True when the whole text is wrapped in one `**...**` pair."""
    text = text.strip()
    return len(text) >= 4 and text.startswith('**') and text.endswith('**')
