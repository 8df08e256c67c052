"""
Rich-text tokenizer tests.

Run:
    python -m unittest indie_sync.tests.test_rich_text
"""

import unittest

from indie_sync.blocks import tokenize, strip_bold
from indie_sync.blocks.rich_text import is_fully_bold
from indie_sync.models import TextSpan


class TestTokenize(unittest.TestCase):

    def test_plain_line_is_one_span(self):
        for line in ["hello", "a * b", "price is $5", "  padded  "]:
            self.assertEqual(tokenize(line), [TextSpan(line)])

    def test_bold_in_middle(self):
        self.assertEqual(tokenize("a **b** c"), [
            TextSpan("a ", False),
            TextSpan("b", True),
            TextSpan(" c", False),
        ])

    def test_underscore_delimiters(self):
        self.assertEqual(tokenize("__x__ y"), [TextSpan("x", True), TextSpan(" y")])

    def test_mismatched_delimiters_are_plain(self):
        self.assertEqual(tokenize("**x__"), [TextSpan("**x__")])

    def test_empty_input(self):
        self.assertEqual(tokenize(""), [])

    def test_no_empty_spans(self):
        spans = tokenize("**a****b**")
        self.assertTrue(all(span.content for span in spans))
        self.assertEqual([s.content for s in spans], ["a", "b"])

    def test_concatenation_drops_markers(self):
        line = "Start **bold** middle __under__ end"
        joined = ''.join(span.content for span in tokenize(line))
        self.assertEqual(joined, "Start bold middle under end")


class TestHelpers(unittest.TestCase):

    def test_strip_bold(self):
        self.assertEqual(strip_bold("**Title**"), "Title")

    def test_is_fully_bold(self):
        self.assertTrue(is_fully_bold("**Title**"))
        self.assertFalse(is_fully_bold("**Title** and more"))
        self.assertFalse(is_fully_bold("**"))


if __name__ == "__main__":
    unittest.main()
