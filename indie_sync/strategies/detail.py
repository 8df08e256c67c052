"""
Product detail page extraction.

Each field has an ordered list of strategies. Nothing here raises: a field
that no strategy finds stays empty.
"""

import re
from urllib.parse import urlparse

from ..config import ASSET_HOST, SOURCE_HOST
from ..logger import get_logger
from ..models import DetailInfo
from .base import (
    Document, CURRENT_SRC_ATTR, text_of, normalize, has_verified_marker, parse_amount,
    first_dollar_amount, first_success, VERIFIED_MARKER,
)

log = get_logger('detail')

MONTHLY_REVENUE = re.compile(r'\$([\d,]+)\s*/?\s*(?:mo|month)', re.IGNORECASE)

FEED_SELECTORS = [
    'article',
    '[class*="post"]',
    '[class*="feed"]',
    '[class*="update"]',
    '[class*="timeline"]',
    'div[class*="Post"]',
]
FEED_TITLE_SELECTOR = "h1, h2, h3, h4, [class*='title'], [class*='headline']"
FEED_BODY_SELECTOR = "p, [class*='content'], [class*='body'], [class*='text']"

POST_DATE = re.compile(
    r'(?:JANUARY|FEBRUARY|MARCH|APRIL|MAY|JUNE|JULY|AUGUST|SEPTEMBER|OCTOBER|NOVEMBER|DECEMBER)'
    r'\s+\d{1,2},\s+\d{4}',
    re.IGNORECASE,
)
POST_WINDOW = 500
SENTENCE_SPLIT = re.compile(r'[.!?]\s+')
MIN_SENTENCE = 20

WEBSITE_SELECTORS = [
    'a[href^="http"]',
    'a[target="_blank"]',
    '[class*="website"] a',
    '[class*="link"] a',
    'a[href*="www"]',
]
SOCIAL_HOSTS = {'twitter.com', 'x.com', 'linkedin.com', 'github.com'}

BADGE_SELECTOR = '.product-card__revenue-explanation'
BADGE_CLASS_FRAGMENT = '[class*="revenue-explanation"]'


# =============================================================================
# THUMBNAIL
# =============================================================================

def _thumbnail(doc: Document) -> str:
    for img in doc.soup.find_all('img'):
        src = doc.resolve_src(img)
        if src and ASSET_HOST in src:
            return src
        current = img.get(CURRENT_SRC_ATTR) or ""
        if current and ASSET_HOST in current:
            return current
    return ""


# =============================================================================
# REVENUE
# =============================================================================

def _monthly_revenue(doc: Document) -> str:
    match = MONTHLY_REVENUE.search(doc.soup.get_text())
    return parse_amount(match.group(1)) if match else ""


def _any_revenue(doc: Document) -> str:
    return first_dollar_amount(doc.soup.get_text())


REVENUE_STRATEGIES = [_monthly_revenue, _any_revenue]


# =============================================================================
# FIRST FEED POST
# =============================================================================

def _feed_container_post(doc: Document) -> str:
    for selector in FEED_SELECTORS:
        posts = doc.soup.select(selector)
        if not posts:
            continue
        first = posts[0]
        title = text_of(first.select_one(FEED_TITLE_SELECTOR))
        body = text_of(first.select_one(FEED_BODY_SELECTOR))
        if title or body:
            return '\n\n'.join(part for part in (title, body) if part)
    return ""


def _dated_post(doc: Document) -> str:
    text = doc.body_text()
    match = POST_DATE.search(text)
    if not match:
        return ""
    after = text[match.end():match.end() + POST_WINDOW]
    sentences = [s.strip() for s in SENTENCE_SPLIT.split(after) if len(s.strip()) > MIN_SENTENCE]
    return '. '.join(sentences[:3])


FEED_STRATEGIES = [_feed_container_post, _dated_post]


# =============================================================================
# WEBSITE URL
# =============================================================================

def _host(url: str) -> str:
    host = urlparse(url).netloc.lower().split(':')[0]
    return host[4:] if host.startswith('www.') else host


def is_product_site(url: str) -> bool:
    """Absolute HTTP link that is neither the source site nor a social profile."""
    if not url or not url.startswith('http'):
        return False
    try:
        host = _host(url)
    except ValueError:
        # Malformed netloc, e.g. an unclosed IPv6 bracket
        return False
    if not host:
        return False
    if host == SOURCE_HOST or host.endswith('.' + SOURCE_HOST):
        return False
    return not any(host == social or host.endswith('.' + social) for social in SOCIAL_HOSTS)


def _website_url(doc: Document) -> str:
    for selector in WEBSITE_SELECTORS:
        for link in doc.soup.select(selector):
            href = doc.resolve_href(link)
            if is_product_site(href):
                return href
    return ""


# =============================================================================
# VERIFICATION
# =============================================================================

def _badge_verified(doc: Document) -> bool:
    return has_verified_marker(doc.soup.select_one(BADGE_SELECTOR))


def _any_badge_verified(doc: Document) -> bool:
    return any(has_verified_marker(el) for el in doc.soup.select(BADGE_CLASS_FRAGMENT))


def _page_text_verified(doc: Document) -> bool:
    return VERIFIED_MARKER in normalize(doc.body_text())


VERIFIED_STRATEGIES = [_badge_verified, _any_badge_verified, _page_text_verified]


# =============================================================================
# ENTRY POINT
# =============================================================================

def extract_details(doc: Document) -> DetailInfo:
    """Read detail-page fields. Never raises."""
    try:
        return DetailInfo(
            thumbnail_url=first_success([_thumbnail], doc, default=""),
            revenue=first_success(REVENUE_STRATEGIES, doc, default=""),
            first_feed_post=first_success(FEED_STRATEGIES, doc, default=""),
            website_url=first_success([_website_url], doc, default=""),
            is_verified=first_success(VERIFIED_STRATEGIES, doc, default=False),
        )
    except Exception as e:
        log.warning(f"Detail extraction failed for {doc.url}: {e}")
        return DetailInfo()
