"""
Listing page extraction.

Finds product links on /products and reads name, description, revenue and
the verified-revenue badge for each. Detail fields are left empty.
"""

from typing import List, Optional

from bs4 import Tag

from ..logger import get_logger
from ..models import Box, ProductListing
from .base import (
    Document, text_of, has_verified_marker, box_of, first_dollar_amount, first_success,
)

log = get_logger('listing')

PRODUCT_PATH = '/product/'
BADGE_SELECTOR = '.product-card__revenue-explanation'

# How far up from a product link the card container may be
ANCESTOR_DEPTH = 5

# Same visual row: badge and link top within this distance, left within ROW_MAX_DX
ROW_MAX_DY = 100
ROW_MAX_DX = 600


# =============================================================================
# LOCATING PRODUCT LINKS
# =============================================================================

def _links_by_prefix(doc: Document) -> List[Tag]:
    return doc.soup.select(f"a[href^='{PRODUCT_PATH}']")


def _links_by_substring(doc: Document) -> List[Tag]:
    return doc.soup.select(f"a[href*='{PRODUCT_PATH}']")


def _links_by_resolved_url(doc: Document) -> List[Tag]:
    return [a for a in doc.soup.find_all('a') if PRODUCT_PATH in doc.resolve_href(a)]


LINK_STRATEGIES = [
    _links_by_prefix,
    _links_by_substring,
    _links_by_resolved_url,
]


def locate_product_links(doc: Document) -> List[Tag]:
    """Product link elements in document order, from the first selector that finds any."""
    return first_success(LINK_STRATEGIES, doc, default=[])


# =============================================================================
# FIELDS
# =============================================================================

def _name(link: Tag) -> str:
    name = text_of(link.find('strong'))
    if not name:
        spans = link.find_all('span')
        if spans:
            name = text_of(spans[0])
    return name


def _description(link: Tag) -> str:
    description = ""
    strong = link.find('strong')
    if strong is not None:
        sibling = strong.find_next_sibling()
        if sibling is not None:
            description = text_of(sibling.find('span'))
    if not description:
        spans = link.find_all('span')
        if len(spans) > 1:
            description = text_of(spans[1])
    return description


def _revenue(link: Tag) -> str:
    digits = first_dollar_amount(link.get_text())
    try:
        return str(int(digits)) if digits else "0"
    except ValueError:
        return "0"


def _badge_in_ancestors(link: Tag) -> bool:
    container = link.parent
    depth = 0
    while container is not None and depth < ANCESTOR_DEPTH:
        if has_verified_marker(container.select_one(BADGE_SELECTOR)):
            return True
        container = container.parent
        depth += 1
    return False


def same_row(entry: Box, badge: Box) -> bool:
    """True when a badge is rendered in the same card row as the entry."""
    return abs(entry.top - badge.top) < ROW_MAX_DY and abs(entry.left - badge.left) < ROW_MAX_DX


def badge_in_row(entry: Optional[Box], badges: List[Box]) -> bool:
    if entry is None:
        return False
    return any(same_row(entry, badge) for badge in badges)


def verified_badge_boxes(doc: Document) -> List[Box]:
    """Boxes of every verified-revenue badge on the page."""
    boxes = []
    for badge in doc.soup.select(BADGE_SELECTOR):
        if not has_verified_marker(badge):
            continue
        box = box_of(badge)
        if box is not None:
            boxes.append(box)
    return boxes


# =============================================================================
# ENTRY POINT
# =============================================================================

def extract_listings(doc: Document) -> List[ProductListing]:
    """
    Enumerate products on the listing page.

    Badges often render outside the link's own card markup, so when no
    ancestor holds a badge the link is matched to badges by layout position.
    """
    links = locate_product_links(doc)
    badges = verified_badge_boxes(doc)
    log.debug(f"{len(links)} product links, {len(badges)} verified badges")

    listings = []
    for link in links:
        verified = _badge_in_ancestors(link) or badge_in_row(box_of(link), badges)
        listings.append(ProductListing(
            name=_name(link) or "Unknown",
            description=_description(link),
            revenue_raw=_revenue(link),
            link=doc.resolve_href(link),
            is_verified=verified,
        ))
    return listings
