"""
Indie Hackers -> Notion Sync

Scrapes the Indie Hackers product directory, enriches each listing from its
detail page, analyzes it with an LLM and upserts the result into Notion.
"""

__version__ = "0.1.0"
