#!/usr/bin/env python3
"""
CLI for the Indie Hackers -> Notion sync.

Usage:
    # Add new products to NOTION_DB_ID
    python -m indie_sync sync

    # Newest N products into NOTION_DB_ID_2, refreshing Verified Stripe
    python -m indie_sync latest --count 20

    # Daily report to NOTION_REPORT_DB_ID / NOTION_REPORT_PAGE_ID (or stdout)
    python -m indie_sync report

    # Print the listing page without touching Notion
    python -m indie_sync list
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import Config
from .errors import ConfigError, NoProductsError, PageLoadError, SyncError
from .llm import Analyst, get_llm_client
from .logger import get_logger, set_level
from .models import ProductListing
from .notion import NotionClient, ProductStore, ReportStore
from .page_loader import PageLoader
from .pipeline import SyncPipeline
from .report import generate_report
from .scraper import IndieHackersScraper

log = get_logger('cli')


def llm_key_name(config: Config) -> str:
    return 'claude_api_key' if config.llm_provider == 'claude' else 'openai_api_key'


def print_listings(products: List[ProductListing], console: Optional[Console] = None):
    """Render the listing entries as a table."""
    table = Table(title=f"Indie Hackers products ({len(products)})")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("MRR", justify="right")
    table.add_column("Verified", justify="center")
    table.add_column("Link")

    for i, product in enumerate(products, start=1):
        table.add_row(
            str(i),
            product.name,
            product.description[:60],
            f"${product.revenue:,.0f}",
            "✓" if product.is_verified else "",
            product.link,
        )
    (console or Console()).print(table)


async def cmd_sync(config: Config, args) -> int:
    config.require('notion_api_key', 'notion_db_id', llm_key_name(config))
    analyst = Analyst(get_llm_client(config))

    async with NotionClient(config.notion_api_key) as notion, PageLoader(headless=config.headless) as loader:
        store = ProductStore(notion, config.notion_db_id)
        pipeline = SyncPipeline(IndieHackersScraper(loader), analyst, store)
        await pipeline.sync()
    return 0


async def cmd_latest(config: Config, args) -> int:
    config.require('notion_api_key', 'notion_db_id_2', llm_key_name(config))
    analyst = Analyst(get_llm_client(config))

    async with NotionClient(config.notion_api_key) as notion, PageLoader(headless=config.headless) as loader:
        store = ProductStore(notion, config.notion_db_id_2, with_verification=True)
        pipeline = SyncPipeline(IndieHackersScraper(loader), analyst, store)
        await pipeline.latest(args.count)
    return 0


async def cmd_report(config: Config, args) -> int:
    config.require(llm_key_name(config))
    has_destination = bool(config.notion_report_db_id or config.notion_report_page_id)
    if has_destination:
        config.require('notion_api_key')
    analyst = Analyst(get_llm_client(config))

    async with PageLoader(headless=config.headless) as loader:
        scraper = IndieHackersScraper(loader)
        if not has_destination:
            await generate_report(scraper, analyst)
            return 0
        async with NotionClient(config.notion_api_key) as notion:
            store = ReportStore(notion, config.notion_report_db_id, config.notion_report_page_id)
            await generate_report(scraper, analyst, store)
    return 0


async def cmd_list(config: Config, args) -> int:
    async with PageLoader(headless=config.headless) as loader:
        products = await IndieHackersScraper(loader).scrape_listing()
    if not products:
        raise NoProductsError("No products found on the listing page")
    print_listings(products)
    return 0


COMMANDS = {
    'sync': cmd_sync,
    'latest': cmd_latest,
    'report': cmd_report,
    'list': cmd_list,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="indie-sync", description="Sync Indie Hackers products into Notion")
    parser.add_argument("--headless", action="store_true", help="Run the browser headless (overrides HEADLESS)")
    parser.add_argument("--log-level", help="Logging level (overrides LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("sync", help="Analyze new products into NOTION_DB_ID")
    latest = subparsers.add_parser("latest", help="Sync the newest products into NOTION_DB_ID_2")
    latest.add_argument("-n", "--count", type=int, default=20, help="Number of products to take")
    subparsers.add_parser("report", help="Generate the daily trend report")
    subparsers.add_parser("list", help="Print the listing page products")
    return parser


async def main(argv: Optional[List[str]] = None, config: Optional[Config] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config or Config()
    if args.headless:
        config.headless = True
    set_level(args.log_level or config.log_level)

    try:
        return await COMMANDS[args.command](config, args)
    except ConfigError as e:
        log.error(str(e))
    except PageLoadError as e:
        log.error(f"Listing page could not be loaded: {e}")
    except NoProductsError as e:
        log.error(str(e))
    except SyncError as e:
        log.error(f"Run failed: {e}")
    return 1


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
