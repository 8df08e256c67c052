"""
Data models for scraping and syncing.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Union


@dataclass
class ProductListing:
    """One product discovered on the listing page.

    `link` is the identity used for dedup against Notion. Every other field
    is best-effort and may be empty.
    """
    name: str = "Unknown"
    description: str = ""
    revenue_raw: str = "0"
    link: str = ""
    thumbnail_url: str = ""
    first_feed_post: str = ""
    website_url: str = ""
    is_verified: bool = False

    @property
    def revenue(self) -> float:
        try:
            return float(self.revenue_raw)
        except (TypeError, ValueError):
            return 0.0

    @property
    def slug(self) -> str:
        """Product slug from a /product/<slug> link, or empty."""
        if '/product/' not in self.link:
            return ""
        return self.link.split('/product/', 1)[1].split('/')[0].split('?')[0]

    def apply_details(self, details: 'DetailInfo'):
        """Merge detail-page values in place. Detail values win when present."""
        if details.thumbnail_url:
            self.thumbnail_url = details.thumbnail_url
        if details.revenue:
            self.revenue_raw = details.revenue
        if details.first_feed_post:
            self.first_feed_post = details.first_feed_post
        if details.website_url:
            self.website_url = details.website_url
        self.is_verified = details.is_verified or self.is_verified


@dataclass
class DetailInfo:
    """Fields read from a product's own page. Empty on miss."""
    thumbnail_url: str = ""
    revenue: str = ""
    first_feed_post: str = ""
    website_url: str = ""
    is_verified: bool = False


@dataclass
class Box:
    """Top-left corner of an element's rendered bounding box."""
    top: float
    left: float


# =============================================================================
# BLOCKS
# =============================================================================

@dataclass
class TextSpan:
    """Inline text run."""
    content: str
    bold: bool = False


@dataclass
class Heading:
    level: int
    spans: List[TextSpan] = field(default_factory=list)


@dataclass
class Paragraph:
    spans: List[TextSpan] = field(default_factory=list)


@dataclass
class BulletListItem:
    spans: List[TextSpan] = field(default_factory=list)
    children: Optional[List['BulletListItem']] = None


@dataclass
class NumberedListItem:
    spans: List[TextSpan] = field(default_factory=list)


@dataclass
class Divider:
    pass


@dataclass
class Table:
    rows: List[str] = field(default_factory=list)


@dataclass
class CodeBlock:
    text: str = ""
    language: str = "plain text"


Block = Union[Heading, Paragraph, BulletListItem, NumberedListItem, Divider, Table, CodeBlock]


# =============================================================================
# SYNC
# =============================================================================

@dataclass
class ProductProperties:
    """Typed Notion property values for one product page."""
    name: str
    description: str
    revenue: float
    url: str
    thumbnail_url: Optional[str] = None
    verified: Optional[bool] = None  # only on the verification schema

    @classmethod
    def from_listing(
        cls,
        listing: ProductListing,
        description: str = "",
        with_verification: bool = False,
    ) -> 'ProductProperties':
        thumbnail = listing.thumbnail_url.strip()
        return cls(
            name=listing.name or "Untitled",
            description=description or "",
            revenue=listing.revenue,
            url=listing.link,
            thumbnail_url=thumbnail if thumbnail.startswith('http') else None,
            verified=listing.is_verified if with_verification else None,
        )


@dataclass
class ItemResult:
    """Outcome of processing one product."""
    name: str
    status: str  # success | error | skipped
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, name: str) -> 'ItemResult':
        return cls(name=name, status="success")

    @classmethod
    def failure(cls, name: str, error) -> 'ItemResult':
        return cls(name=name, status="error", error=str(error))

    @classmethod
    def skipped(cls, name: str, reason: str) -> 'ItemResult':
        return cls(name=name, status="skipped", error=reason)


@dataclass
class SyncSummary:
    """End-of-run counts."""
    results: List[ItemResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == "error")

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == "skipped")


@dataclass
class PageData:
    """Rendered page snapshot (HTML after layout annotation)."""
    url: str
    html: str = ""
