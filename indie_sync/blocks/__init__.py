"""
Markdown -> Notion block translation.
"""

from .rich_text import tokenize, strip_bold
from .parser import BlockParser, parse_blocks

__all__ = [
    'tokenize',
    'strip_bold',
    'BlockParser',
    'parse_blocks',
]
