"""
API Model Adapter

Unified adapter for hosted LLM chat-completion APIs used to phrase
condition explanations:
- Groq (fast, OpenAI-compatible)
- OpenRouter (multi-model)
"""

import os
import aiohttp
from typing import Dict, List, Optional
from abc import ABC, abstractmethod


class RateLimitError(Exception):
    """Exception for API rate limits."""
    pass


class APIAdapter(ABC):
    """Base class for API adapters."""

    name: str = ""

    @abstractmethod
    async def generate(self, prompt: str, **kwargs) -> str:
        """Generate text from prompt."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if API is configured."""
        pass


class ChatCompletionsAdapter(APIAdapter):
    """
    Shared client for OpenAI-style /chat/completions endpoints.

    Subclasses set BASE_URL, MODELS and the API-key environment variable.
    """

    BASE_URL = ""
    MODELS: Dict[str, str] = {}
    DEFAULT_MODEL = ""
    API_KEY_ENV = ""

    def __init__(self, api_key: str = None, timeout: float = 60):
        self.api_key = api_key or os.getenv(self.API_KEY_ENV, "")
        self.default_model = self.MODELS[self.DEFAULT_MODEL]
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def generate(
        self,
        prompt: str,
        model: str = None,
        system_prompt: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 200,
        **kwargs
    ) -> str:
        """
        Generate a completion.

        Args:
            prompt: User prompt
            model: Model key or full model name
            system_prompt: Optional system message
            temperature: Sampling temperature
            max_tokens: Maximum response tokens

        Returns:
            Generated text

        Raises:
            ValueError: API key not configured
            RateLimitError: HTTP 429
            ConnectionError: network or HTTP failure
        """
        if not self.api_key:
            raise ValueError(f"{self.name} API key not configured")

        model_name = self.MODELS.get(model, model) if model else self.default_model

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": model_name,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.BASE_URL,
                    headers=self._headers(),
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status == 429:
                        raise RateLimitError(f"{self.name} rate limit exceeded")

                    response.raise_for_status()
                    data = await response.json()

                    return data["choices"][0]["message"]["content"]

        except aiohttp.ClientError as e:
            raise ConnectionError(f"{self.name} connection error: {e}")

    async def generate_with_fallback(
        self,
        prompt: str,
        models: List[str] = None,
        **kwargs
    ) -> str:
        """
        Try multiple models with fallback.

        Returns:
            Generated text from first successful model
        """
        models = models or list(self.MODELS)

        last_error = None
        for model in models:
            try:
                return await self.generate(prompt, model=model, **kwargs)
            except (RateLimitError, ConnectionError) as e:
                last_error = e
                continue

        raise last_error or ConnectionError(f"All {self.name} models failed")


class GroqAdapter(ChatCompletionsAdapter):
    """Adapter for the Groq API (low-latency open models)."""

    name = "groq"
    BASE_URL = "https://api.groq.com/openai/v1/chat/completions"
    MODELS = {
        "llama-70b": "llama-3.3-70b-versatile",
        "llama-8b": "llama-3.1-8b-instant",
    }
    DEFAULT_MODEL = "llama-70b"
    API_KEY_ENV = "GROQ_API_KEY"


class OpenRouterAdapter(ChatCompletionsAdapter):
    """
    Adapter for OpenRouter API.

    Good for:
    - Vendor flexibility
    - Fallback when the primary provider is rate limited
    """

    name = "openrouter"
    BASE_URL = "https://openrouter.ai/api/v1/chat/completions"
    MODELS = {
        "haiku": "anthropic/claude-3-haiku",
        "mixtral": "mistralai/mixtral-8x7b-instruct",
        "llama": "meta-llama/llama-3-70b-instruct",
    }
    DEFAULT_MODEL = "haiku"
    API_KEY_ENV = "OPENROUTER_API_KEY"

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["X-Title"] = "Wellness Insight"
        return headers


API_ADAPTERS = {
    GroqAdapter.name: GroqAdapter,
    OpenRouterAdapter.name: OpenRouterAdapter,
}


def get_api_adapter(provider: str = "groq", **kwargs) -> APIAdapter:
    """
    Get API adapter by provider name.

    Args:
        provider: "groq" or "openrouter"

    Returns:
        API adapter
    """
    if provider not in API_ADAPTERS:
        raise ValueError(f"Unknown provider: {provider}")
    return API_ADAPTERS[provider](**kwargs)
