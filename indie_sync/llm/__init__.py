"""
LLM access: provider interfaces, prompts and the product analyst.
"""

from .interface import LLMInterface, OpenAIInterface, ClaudeInterface, get_llm_client
from .analyst import Analyst

__all__ = [
    'LLMInterface',
    'OpenAIInterface',
    'ClaudeInterface',
    'get_llm_client',
    'Analyst',
]
