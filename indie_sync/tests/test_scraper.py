"""
Scraper tests: cap, dedup and per-item failure isolation.

Run:
    python -m unittest indie_sync.tests.test_scraper
"""

import unittest

from indie_sync.errors import NoProductsError
from indie_sync.models import PageData, ProductListing
from indie_sync.scraper import IndieHackersScraper, synthesize_thumbnail
from indie_sync.tests.fakes import FakeLoader, OverlapTracker, listing_html

BASE = "https://www.indiehackers.com/product/"


def detail_page(url, body):
    return PageData(url=url, html=f"<html><body>{body}</body></html>")


class TestScrape(unittest.IsolatedAsyncioTestCase):

    async def test_cap_keeps_first_thirty(self):
        loader = FakeLoader(listing_html(50))
        products = await IndieHackersScraper(loader).scrape()

        self.assertEqual(len(products), 30)
        self.assertEqual(len(loader.detail_urls), 30)
        self.assertEqual(products[0].link, BASE + "p0")
        self.assertEqual(products[-1].link, BASE + "p29")
        self.assertNotIn(BASE + "p30", loader.detail_urls)

    async def test_known_links_skipped_before_enrichment(self):
        loader = FakeLoader(listing_html(3))
        products = await IndieHackersScraper(loader).scrape(skip_links={BASE + "p1"})

        self.assertEqual([p.link for p in products], [BASE + "p0", BASE + "p2"])
        self.assertNotIn(BASE + "p1", loader.detail_urls)

    async def test_empty_listing_raises(self):
        with self.assertRaises(NoProductsError):
            await IndieHackersScraper(FakeLoader("<html><body></body></html>")).scrape()

    async def test_all_known_returns_empty(self):
        loader = FakeLoader(listing_html(2))
        products = await IndieHackersScraper(loader).scrape(skip_links={BASE + "p0", BASE + "p1"})
        self.assertEqual(products, [])
        self.assertEqual(loader.detail_urls, [])

    async def test_detail_failure_keeps_listing_values(self):
        loader = FakeLoader(listing_html(3), details={
            BASE + "p0": detail_page(BASE + "p0", "<p>$9,000/mo</p><a href='https://p0.app'>site</a>"),
            BASE + "p1": TimeoutError("detail timed out"),
        })
        products = await IndieHackersScraper(loader).scrape()

        self.assertEqual(len(products), 3)
        self.assertEqual(products[0].revenue_raw, "9000")
        self.assertEqual(products[0].website_url, "https://p0.app")
        # p1 keeps the listing-page revenue and gets no synthesized thumbnail
        self.assertEqual(products[1].revenue_raw, "200")
        self.assertEqual(products[1].thumbnail_url, "")
        self.assertEqual(products[2].revenue_raw, "300")

    async def test_missing_thumbnail_synthesized(self):
        loader = FakeLoader(listing_html(1))
        product = (await IndieHackersScraper(loader).scrape())[0]
        self.assertEqual(
            product.thumbnail_url,
            "https://storage.googleapis.com/indie-hackers.appspot.com/product-avatars/p0/128x128_p0.webp",
        )

    async def test_listing_verification_survives_enrichment(self):
        loader = FakeLoader(listing_html(2, verified_slugs={"p1"}))
        products = await IndieHackersScraper(loader).scrape()
        self.assertEqual([p.is_verified for p in products], [False, True])

    async def test_scrape_latest(self):
        products = await IndieHackersScraper(FakeLoader(listing_html(10))).scrape_latest(4)
        self.assertEqual([p.name for p in products], [f"Product {i}" for i in range(4)])


class TestConcurrency(unittest.IsolatedAsyncioTestCase):

    async def test_detail_pages_load_concurrently(self):
        tracker = OverlapTracker(expected=5)
        loader = FakeLoader(listing_html(5), tracker=tracker)
        products = await IndieHackersScraper(loader).scrape()

        self.assertEqual(len(products), 5)
        self.assertEqual(tracker.max_in_flight, 5)

    async def test_failed_detail_does_not_block_siblings(self):
        tracker = OverlapTracker(expected=3)
        loader = FakeLoader(listing_html(3), details={BASE + "p0": TimeoutError("slow")}, tracker=tracker)
        products = await IndieHackersScraper(loader).scrape()

        self.assertEqual(tracker.max_in_flight, 3)
        self.assertEqual([p.revenue_raw for p in products], ["100", "200", "300"])


class TestWebsiteContent(unittest.IsolatedAsyncioTestCase):

    async def test_content(self):
        loader = FakeLoader(listing_html(1), websites={
            "https://foo.app": PageData(url="https://foo.app", html="<html><body><h1>Foo</h1></body></html>"),
        })
        scraper = IndieHackersScraper(loader)
        self.assertEqual(await scraper.website_content("https://foo.app"), "Title: Foo")
        self.assertEqual(await scraper.website_content("https://missing.app"), "")


class TestSynthesizeThumbnail(unittest.TestCase):

    def test_no_slug(self):
        self.assertEqual(synthesize_thumbnail(ProductListing(link="")), "")


if __name__ == "__main__":
    unittest.main()
