"""
Shared helpers for extraction strategies.
"""

import re
from typing import Callable, Iterable, Optional, Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from ..logger import get_logger
from ..models import Box, PageData

log = get_logger('strategies')

# Rendered bounding box / resolved URL attributes written by the page loader
BOX_TOP_ATTR = 'data-box-top'
BOX_LEFT_ATTR = 'data-box-left'
RESOLVED_HREF_ATTR = 'data-resolved-href'
RESOLVED_SRC_ATTR = 'data-resolved-src'
CURRENT_SRC_ATTR = 'data-current-src'

VERIFIED_MARKER = 'verified revenue'

_WHITESPACE = re.compile(r'\s+')
_DOLLAR_AMOUNT = re.compile(r'\$([\d,]+)')


class Document:
    """
    Parsed page snapshot.

    Wraps the BeautifulSoup tree together with the page URL so relative
    links resolve the way the browser resolved them.
    """

    def __init__(self, html: str, url: str = ""):
        self.url = url
        self.soup = BeautifulSoup(html or "", 'html.parser')

    @classmethod
    def from_page(cls, page_data: PageData) -> 'Document':
        return cls(page_data.html, page_data.url)

    def resolve_href(self, el: Tag) -> str:
        """Absolute URL of a link element."""
        resolved = el.get(RESOLVED_HREF_ATTR)
        if resolved:
            return resolved
        href = el.get('href')
        if not href:
            return ""
        try:
            return urljoin(self.url, href)
        except ValueError:
            return ""

    def resolve_src(self, el: Tag) -> str:
        """Absolute source URL of an image element."""
        resolved = el.get(RESOLVED_SRC_ATTR)
        if resolved:
            return resolved
        src = el.get('src')
        if not src:
            return ""
        try:
            return urljoin(self.url, src)
        except ValueError:
            return ""

    def body_text(self) -> str:
        root = self.soup.body or self.soup
        return root.get_text()


def text_of(el: Optional[Tag]) -> str:
    """Trimmed text content of an element, empty for None."""
    if el is None:
        return ""
    return el.get_text().strip()


def normalize(text: str) -> str:
    """Collapse whitespace and case-fold."""
    return _WHITESPACE.sub(' ', text or '').lower()


def has_verified_marker(el: Optional[Tag]) -> bool:
    return el is not None and VERIFIED_MARKER in normalize(el.get_text())


def box_of(el: Tag) -> Optional[Box]:
    """Bounding box recorded on the element, or None."""
    try:
        return Box(top=float(el[BOX_TOP_ATTR]), left=float(el[BOX_LEFT_ATTR]))
    except (KeyError, TypeError, ValueError):
        return None


def parse_amount(digits: str) -> str:
    """'1,234' -> '1234'. Empty when no digits remain."""
    return (digits or '').replace(',', '')


def first_dollar_amount(text: str) -> str:
    """First `$<digits>` amount in text with commas removed, or empty."""
    match = _DOLLAR_AMOUNT.search(text or '')
    if not match:
        return ""
    return parse_amount(match.group(1))


def first_success(strategies: Iterable[Callable[..., Any]], *args, default=None):
    """
    Run strategies in order and return the first truthy result.

    A strategy that raises is logged and skipped, so one broken heuristic
    never hides the ones after it.
    """
    for strategy in strategies:
        try:
            result = strategy(*args)
        except Exception as e:
            log.debug(f"{getattr(strategy, '__name__', strategy)} failed: {e}")
            continue
        if result:
            return result
    return default
