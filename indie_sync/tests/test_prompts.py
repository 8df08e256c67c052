"""
Prompt tests: the analysis layout must survive the block parser.

Run:
    python -m unittest indie_sync.tests.test_prompts
"""

import unittest

from indie_sync.blocks import parse_blocks
from indie_sync.llm.prompts import get_analysis_prompt, get_translation_prompt
from indie_sync.models import Heading, ProductListing


def heading_texts(blocks, level):
    return [
        ''.join(span.content for span in b.spans)
        for b in blocks if isinstance(b, Heading) and b.level == level
    ]


class TestAnalysisPrompt(unittest.TestCase):

    def test_section_titles_are_markdown_headings(self):
        prompt = get_analysis_prompt(ProductListing(name="Foo", description="Does foo"))
        titles = heading_texts(parse_blocks(prompt), 2)

        self.assertEqual(len(titles), 5)
        self.assertEqual(titles[0], "1️⃣ Core value proposition")
        self.assertEqual(titles[-1], "5️⃣ Business model")

    def test_optional_context(self):
        product = ProductListing(name="Foo", first_feed_post="We launched")
        self.assertIn("[First feed post]\nWe launched", get_analysis_prompt(product))
        self.assertNotIn("[Product website]", get_analysis_prompt(product))
        self.assertIn("[Product website]\nTitle: Foo", get_analysis_prompt(product, "Title: Foo"))

    def test_translation_prompt_carries_description(self):
        self.assertIn("Does foo", get_translation_prompt(ProductListing(description="Does foo")))


if __name__ == "__main__":
    unittest.main()
