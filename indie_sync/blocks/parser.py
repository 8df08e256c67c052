"""
Block Parser
============

Single-pass translation of loosely structured LLM markdown into typed blocks.

Running state:
    - open bullet run (with nested children on its items)
    - open numbered run
    - buffered table rows + "in table" flag

Tables are not translated into Notion's table model. A buffered table is
emitted as one plain-text code block holding the raw rows.

Headings `###` and `####` both become level 3, and a bullet that is entirely
bold (or a short question) is promoted to a level-3 heading. LLM output uses
those bullets as sub-section titles.
"""

import re
from typing import List

from ..models import (
    Block, Heading, Paragraph, BulletListItem, NumberedListItem, Divider, CodeBlock,
)
from .rich_text import tokenize, strip_bold, is_fully_bold


HEADING_PREFIXES = [
    ('####', 3),
    ('###', 3),
    ('##', 2),
    ('#', 1),
]

DIVIDER_PATTERN = re.compile(r'^[-*_]{3,}$')
NUMBERED_PATTERN = re.compile(r'^(\d+)\.\s+(.+)$')
BULLET_PATTERN = re.compile(r'^[-•*]\s+')
NESTED_BULLET_PATTERN = re.compile(r'^(\s{2,})[-•*]\s+(.+)$')
TABLE_SEPARATOR_PATTERN = re.compile(r'^[\s|:\-]+$')

# Bullets with a '?' shorter than this are treated as sub-headings
QUESTION_HEADING_MAX = 100


class BlockParser:
    """
    Stateful markdown -> Block converter. Use parse_blocks() for one-shot calls.

    Never raises on string input: anything unrecognised becomes a Paragraph.
    """

    def __init__(self):
        self.blocks: List[Block] = []
        self._bullets: List[BulletListItem] = []
        self._numbered: List[NumberedListItem] = []
        self._table_rows: List[str] = []
        self._in_table = False

    def parse(self, text: str) -> List[Block]:
        self.blocks = []
        self._bullets = []
        self._numbered = []
        self._table_rows = []
        self._in_table = False

        for raw in (text or '').split('\n'):
            self._feed(raw)

        if self._in_table:
            self._flush_table()
        self._flush_lists()
        return self.blocks

    # ------------------------------------------------------------------ lines

    def _feed(self, raw: str):
        line = raw.strip()

        if not line:
            if self._in_table:
                self._flush_table()
            self._flush_lists()
            return

        if line.startswith('|') and line.endswith('|'):
            if not self._in_table:
                self._flush_lists()
                self._in_table = True
            self._table_rows.append(line)
            return

        if self._in_table:
            self._flush_table()

        for prefix, level in HEADING_PREFIXES:
            if line.startswith(prefix):
                self._flush_lists()
                text = line[len(prefix):].lstrip()
                self.blocks.append(Heading(level=level, spans=tokenize(text)))
                return

        if DIVIDER_PATTERN.match(line):
            self._flush_lists()
            self.blocks.append(Divider())
            return

        numbered = NUMBERED_PATTERN.match(line)
        if numbered:
            self._flush_bullets()
            self._numbered.append(NumberedListItem(spans=tokenize(numbered.group(2))))
            return

        # Indentation is only visible on the untrimmed line
        nested = NESTED_BULLET_PATTERN.match(raw.rstrip())
        if nested:
            self._add_nested(nested.group(2).strip())
            return

        if BULLET_PATTERN.match(line):
            self._flush_numbered()
            self._add_bullet(BULLET_PATTERN.sub('', line, count=1))
            return

        self._flush_lists()
        self.blocks.append(Paragraph(spans=tokenize(line)))

    def _add_bullet(self, content: str):
        if is_fully_bold(content) or ('?' in content and len(content) < QUESTION_HEADING_MAX):
            self._flush_lists()
            heading = strip_bold(content).strip()
            self.blocks.append(Heading(level=3, spans=tokenize(heading)))
            return
        self._bullets.append(BulletListItem(spans=tokenize(content)))

    def _add_nested(self, content: str):
        child = BulletListItem(spans=tokenize(content))
        if self._bullets:
            parent = self._bullets[-1]
            if parent.children is None:
                parent.children = []
            parent.children.append(child)
        else:
            # No orphaned nesting: start a new top-level run
            self._flush_lists()
            self._bullets.append(child)

    # --------------------------------------------------------------- flushing

    def _flush_bullets(self):
        if self._bullets:
            self.blocks.extend(self._bullets)
            self._bullets = []

    def _flush_numbered(self):
        if self._numbered:
            self.blocks.extend(self._numbered)
            self._numbered = []

    def _flush_lists(self):
        self._flush_bullets()
        self._flush_numbered()

    def _flush_table(self):
        rows = self._table_rows
        self._table_rows = []
        self._in_table = False

        if len(rows) < 2:
            return
        data_rows = [row for row in rows if not TABLE_SEPARATOR_PATTERN.match(row)]
        if not data_rows:
            return
        self.blocks.append(CodeBlock(text='\n'.join(rows)))


def parse_blocks(text: str) -> List[Block]:
    """Convert markdown text into an ordered list of blocks."""
    return BlockParser().parse(text)
