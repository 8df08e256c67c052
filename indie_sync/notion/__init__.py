"""
Notion destination store.
"""

from .client import NotionClient
from .store import ProductStore, ReportStore

__all__ = [
    'NotionClient',
    'ProductStore',
    'ReportStore',
]
