"""LLM clients for the governance advisor (OpenAI and Ollama)."""
from typing import Any, Optional

from openai import AsyncOpenAI

from governance_agent.core.config import Settings, get_settings
from governance_agent.core.errors import LLMError
from governance_agent.core.logging import get_logger

logger = get_logger(__name__)

# Ollama는 실제 API 키가 필요하지 않지만,
# OpenAI 클라이언트가 API 키를 요구하므로 상수로 정의합니다.
OLLAMA_API_KEY_PLACEHOLDER = "ollama"


class OpenAIClient:
    """Chat completion client for the OpenAI API."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.client: Optional[AsyncOpenAI] = None

        if self.api_key:
            self.client = AsyncOpenAI(api_key=self.api_key)
            logger.info("openai_client_initialized", model=self.model)
        else:
            logger.warning("openai_api_key_missing")

    async def generate_completion(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        """
        Generate a chat completion.

        Args:
            messages: Chat messages
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text content

        Raises:
            LLMError: No API key configured, or the response carried no text
        """
        if self.client is None:
            raise LLMError(
                message="OpenAI API key is not configured",
                operation="chat.completions.create",
            )

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content
        if not content:
            raise LLMError(message="Empty completion", operation="chat.completions.create")
        return content


class OllamaClient:
    """Ollama client using its OpenAI-compatible API."""

    def __init__(self, base_url: Optional[str] = None, model: Optional[str] = None):
        """
        Args:
            base_url: Ollama base URL (default from settings)
            model: Model name (default from settings)
        """
        settings = get_settings()
        self.base_url = base_url or settings.ollama_base_url
        self.model = model or settings.ollama_model

        self.client = AsyncOpenAI(
            base_url=f"{self.base_url}/v1",
            api_key=OLLAMA_API_KEY_PLACEHOLDER,
        )

        logger.info("ollama_client_initialized", base_url=self.base_url, model=self.model)

    async def generate_completion(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        """Generate completion using Ollama."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content
        if not content:
            raise LLMError(message="Empty completion", operation="chat.completions.create")
        return content


class LLMClientFactory:
    """Factory for creating LLM clients based on provider setting."""

    @staticmethod
    def create_client(settings: Optional[Settings] = None) -> Any:
        """
        Create LLM client based on settings.

        Returns:
            OpenAIClient or OllamaClient
        """
        settings = settings or get_settings()
        provider = settings.advisor_provider

        if provider == "ollama":
            return OllamaClient(base_url=settings.ollama_base_url, model=settings.ollama_model)
        elif provider == "openai":
            return OpenAIClient(api_key=settings.openai_api_key, model=settings.openai_model)
        else:
            raise ValueError(f"Unsupported LLM provider: {provider}")
