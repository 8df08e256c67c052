"""
Async LLM interface with OpenAI and Claude providers.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict

from ..config import Config
from ..errors import ConfigError, LLMError


class LLMInterface(ABC):
    """Abstract base class for LLM providers"""

    @abstractmethod
    async def complete(self, prompt: str, temperature: float = 0.0, max_tokens: int = 4000) -> str:
        """Generate a text response from a prompt"""
        pass

    def get_last_usage(self) -> Optional[Dict[str, int]]:
        """Return token usage from last call: {input_tokens, output_tokens}"""
        return getattr(self, '_last_usage', None)


class OpenAIInterface(LLMInterface):
    """OpenAI chat completions interface"""

    def __init__(self, api_key: str, model: Optional[str] = None):
        from openai import AsyncOpenAI
        if not api_key:
            raise ConfigError("OPENAI_API_KEY required for OpenAI provider")
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model or "gpt-4o-mini"
        self._last_usage = None

    async def complete(self, prompt: str, temperature: float = 0.0, max_tokens: int = 4000) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise LLMError(f"OpenAI request failed: {e}") from e

        if response.usage:
            self._last_usage = {
                'input_tokens': response.usage.prompt_tokens,
                'output_tokens': response.usage.completion_tokens,
            }
        content = response.choices[0].message.content if response.choices else None
        return (content or "").strip()


class ClaudeInterface(LLMInterface):
    """Anthropic Claude interface"""

    def __init__(self, api_key: str, model: Optional[str] = None):
        from anthropic import AsyncAnthropic
        if not api_key:
            raise ConfigError("CLAUDE_API_KEY or ANTHROPIC_API_KEY required for Claude provider")
        self.client = AsyncAnthropic(api_key=api_key)
        self.model = model or "claude-sonnet-4-20250514"
        self._last_usage = None

    async def complete(self, prompt: str, temperature: float = 0.0, max_tokens: int = 4000) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise LLMError(f"Claude request failed: {e}") from e

        if hasattr(response, 'usage'):
            self._last_usage = {
                'input_tokens': response.usage.input_tokens,
                'output_tokens': response.usage.output_tokens,
            }
        texts = [block.text for block in response.content if getattr(block, 'type', '') == 'text']
        return ''.join(texts).strip()


def get_llm_client(config: Config) -> LLMInterface:
    """Factory: build the provider selected by LLM_PROVIDER"""
    if config.llm_provider == 'claude':
        return ClaudeInterface(api_key=config.claude_api_key, model=config.llm_model)
    elif config.llm_provider == 'openai':
        return OpenAIInterface(api_key=config.openai_api_key, model=config.llm_model)
    else:
        raise ConfigError(f"Unsupported LLM provider: {config.llm_provider}")
