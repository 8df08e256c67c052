"""
Extraction strategies for the listing page, product detail pages and
product websites.

Every field is an ordered list of small strategy functions; the first one
that returns a value wins.
"""

from .base import Document, first_success
from .listing import extract_listings
from .detail import extract_details
from .website import extract_website_content

__all__ = [
    'Document',
    'first_success',
    'extract_listings',
    'extract_details',
    'extract_website_content',
]
