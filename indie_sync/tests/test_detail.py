"""
Detail page and product website extraction tests.

Run:
    python -m unittest indie_sync.tests.test_detail
"""

import unittest

from indie_sync.models import DetailInfo
from indie_sync.strategies import Document, extract_details, extract_website_content, first_success
from indie_sync.strategies.detail import is_product_site

DETAIL_URL = "https://www.indiehackers.com/product/foo"
AVATAR = "https://storage.googleapis.com/indie-hackers.appspot.com/product-avatars/foo/128x128_foo.webp"


def page(body, url=DETAIL_URL):
    return Document(f"<html><body>{body}</body></html>", url)


FULL_PAGE = f"""
<img src="/logo.png">
<img src="{AVATAR}">
<div class="product-card__revenue-explanation">Verified revenue</div>
<div class="stats"><span>$12,500/mo</span></div>
<a href="https://twitter.com/foo">Twitter</a>
<a href="https://www.indiehackers.com/product/foo">Self</a>
<a href="https://foo.app" target="_blank">Website</a>
<article><h2>We launched</h2><p>First customers arrived.</p></article>
"""


class TestExtractDetails(unittest.TestCase):

    def test_full_page(self):
        details = extract_details(page(FULL_PAGE))
        self.assertEqual(details.thumbnail_url, AVATAR)
        self.assertEqual(details.revenue, "12500")
        self.assertEqual(details.website_url, "https://foo.app")
        self.assertEqual(details.first_feed_post, "We launched\n\nFirst customers arrived.")
        self.assertTrue(details.is_verified)

    def test_empty_page(self):
        self.assertEqual(extract_details(page("")), DetailInfo())


class TestThumbnail(unittest.TestCase):

    def test_current_src(self):
        doc = page(f'<img src="/placeholder.gif" data-current-src="{AVATAR}">')
        self.assertEqual(extract_details(doc).thumbnail_url, AVATAR)

    def test_no_asset_host(self):
        doc = page('<img src="https://cdn.example.com/a.png">')
        self.assertEqual(extract_details(doc).thumbnail_url, "")


class TestRevenue(unittest.TestCase):

    def test_monthly_pattern(self):
        self.assertEqual(extract_details(page("<p>$1,234/mo</p>")).revenue, "1234")

    def test_bare_amount_fallback(self):
        self.assertEqual(extract_details(page("<p>Made $1,234 so far</p>")).revenue, "1234")

    def test_monthly_preferred_over_earlier_bare_amount(self):
        doc = page("<p>Raised $3,000 in funding</p><p>Now at $1,234 / month</p>")
        self.assertEqual(extract_details(doc).revenue, "1234")

    def test_case_insensitive(self):
        self.assertEqual(extract_details(page("<p>$50/MO</p>")).revenue, "50")

    def test_no_amount(self):
        self.assertEqual(extract_details(page("<p>free</p>")).revenue, "")


class TestFeedPost(unittest.TestCase):

    def test_container_with_body_only(self):
        doc = page('<div class="feed-item"><p>Only a body here.</p></div>')
        self.assertEqual(extract_details(doc).first_feed_post, "Only a body here.")

    def test_dated_fallback(self):
        doc = page(
            "<div>Posted by foo MARCH 3, 2024 We shipped the new dashboard today. "
            "Users love the export feature a lot. Short. "
            "Another sentence that is long enough here. "
            "Fourth sentence which is also quite long.</div>"
        )
        self.assertEqual(
            extract_details(doc).first_feed_post,
            "We shipped the new dashboard today. Users love the export feature a lot. "
            "Another sentence that is long enough here",
        )

    def test_nothing_found(self):
        self.assertEqual(extract_details(page("<div>No posts</div>")).first_feed_post, "")


class TestWebsite(unittest.TestCase):

    def test_excludes_source_and_social(self):
        self.assertFalse(is_product_site("https://www.indiehackers.com/product/foo"))
        self.assertFalse(is_product_site("https://x.com/foo"))
        self.assertFalse(is_product_site("https://www.linkedin.com/in/foo"))
        self.assertFalse(is_product_site("mailto:me@foo.app"))
        self.assertFalse(is_product_site(""))
        self.assertTrue(is_product_site("https://foo.app/pricing"))

    def test_malformed_link_does_not_stop_scan(self):
        doc = page('<a href="http://[bad">x</a><a href="https://good.app">site</a>')
        self.assertEqual(extract_details(doc).website_url, "https://good.app")

    def test_malformed_url_is_not_product_site(self):
        self.assertFalse(is_product_site("http://[bad"))

    def test_class_container_fallback(self):
        doc = page('<div class="website"><a href="//foo.io">foo.io</a></div>')
        self.assertEqual(extract_details(doc).website_url, "https://foo.io")


class TestVerification(unittest.TestCase):

    def test_class_fragment(self):
        doc = page('<span class="detail__revenue-explanation">Verified Revenue</span>')
        self.assertTrue(extract_details(doc).is_verified)

    def test_page_text(self):
        doc = page("<p>This product has verified\n  revenue via Stripe</p>")
        self.assertTrue(extract_details(doc).is_verified)

    def test_not_verified(self):
        self.assertFalse(extract_details(page("<p>Self-reported</p>")).is_verified)


class TestFirstSuccess(unittest.TestCase):

    def test_skips_failing_strategy(self):
        def broken(_):
            raise RuntimeError("boom")

        self.assertEqual(first_success([broken, lambda x: "", lambda x: x * 2], 2), 4)

    def test_default(self):
        self.assertEqual(first_success([lambda: None], default="none"), "none")


class TestWebsiteContent(unittest.TestCase):

    def test_labelled_parts(self):
        doc = page(
            "<h1>Foo App</h1>"
            "<section class='hero'><p>Ship your side project twice as fast.</p></section>"
            "<ul>"
            "<li class='feature'>Automatic deploys on push</li>"
            "<li class='feature'>Tiny</li>"
            "</ul>"
            "<div class='pricing'>Starter   $9 / month</div>",
            url="https://foo.app",
        )
        content = extract_website_content(doc)
        lines = content.split("\n")
        self.assertEqual(lines[0], "Title: Foo App")
        self.assertEqual(lines[1], "Hero: Ship your side project twice as fast.")
        self.assertIn("Features: Automatic deploys on push", lines)
        self.assertEqual(lines[-1], "Pricing: Starter $9 / month")

    def test_empty(self):
        self.assertEqual(extract_website_content(page("")), "")


if __name__ == "__main__":
    unittest.main()
