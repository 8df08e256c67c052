"""
Product analyst: analysis, translation and trend summaries over an LLM.
"""

from typing import List

from ..errors import LLMError
from ..logger import get_logger
from ..models import ProductListing
from . import prompts
from .interface import LLMInterface

log = get_logger('analyst')

ANALYSIS_TEMPERATURE = 0.7
TRANSLATION_TEMPERATURE = 0.3
TREND_TEMPERATURE = 0.7
TREND_MAX_PRODUCTS = 30


class Analyst:
    """Wraps an LLMInterface with the product prompts."""

    def __init__(self, llm: LLMInterface):
        self.llm = llm

    async def analyze(self, product: ProductListing, website_content: str = "") -> str:
        """Markdown analysis of one product. Raises LLMError on an empty answer."""
        prompt = prompts.get_analysis_prompt(product, website_content)
        text = await self.llm.complete(prompt, temperature=ANALYSIS_TEMPERATURE)
        if not text:
            raise LLMError(f"Empty analysis for {product.name}")
        return text

    async def translate(self, product: ProductListing) -> str:
        """Translated description; the untranslated description if the model returns nothing."""
        if not product.description:
            return ""
        prompt = prompts.get_translation_prompt(product)
        text = await self.llm.complete(prompt, temperature=TRANSLATION_TEMPERATURE)
        return text or product.description

    async def trend_summary(self, products: List[ProductListing]) -> str:
        prompt = prompts.get_trend_prompt(products[:TREND_MAX_PRODUCTS])
        text = await self.llm.complete(prompt, temperature=TREND_TEMPERATURE)
        if not text:
            raise LLMError("Empty trend summary")
        return text
