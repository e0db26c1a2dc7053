"""
OpenAI LLM provider using official SDK.
"""

from openai import AsyncOpenAI

from smartnotes.core.llm.base import LLMProvider
from smartnotes.utils.exceptions import LLMError, ValidationError
from smartnotes.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAILLM(LLMProvider):
    """
    OpenAI LLM provider for text generation.

    Uses the chat completions API with the instruction as system message.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        organization: str | None = None,
        base_url: str | None = None,
        timeout: float = 120.0,
    ):
        """
        Initialize OpenAI LLM provider.

        Args:
            api_key: OpenAI API key
            model: Model name (e.g., "gpt-4o", "gpt-4o-mini")
            organization: Optional organization ID
            base_url: Optional custom base URL
            timeout: Request timeout in seconds
        """
        self.model = model

        self.client = AsyncOpenAI(
            api_key=api_key, organization=organization, base_url=base_url, timeout=timeout
        )

    async def complete(
        self,
        prompt: str,
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float = 0.0,
        **kwargs,
    ) -> str:
        """
        Generate completion using OpenAI.

        Args:
            prompt: Input text
            system: Optional system instruction
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            **kwargs: Additional parameters (e.g., stop, presence_penalty)
        Returns:
            Generated text
        Raises:
            LLMError: If OpenAI API call fails or returns nothing
            ValidationError: If the prompt is empty
        """
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt cannot be empty")

        params = {
            "model": self.model,
            "messages": self.build_messages(prompt, system),
            "temperature": temperature,
            "max_tokens": max_tokens,
            **kwargs,
        }

        try:
            response = await self.client.chat.completions.create(**params)
            content = response.choices[0].message.content
        except Exception as e:
            logger.error(
                "OpenAI API error",
                extra={"model": self.model, "error": str(e), "error_type": type(e).__name__},
            )
            raise LLMError(f"OpenAI API error: {e}") from e

        if not content:
            raise LLMError("OpenAI returned empty content", context={"model": self.model})

        return content

    async def close(self):
        """Close OpenAI client."""
        await self.client.close()
