"""
Abstract base class for LLM providers.
Handles plain text completion steered by a system instruction.
"""

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """
    Abstract base for LLM text generation providers.

    Responsibilities:
    - Text completion with an optional system instruction
    - Connection cleanup
    """

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        system: str | None = None,
        max_tokens: int = 2000,
        temperature: float = 0.0,
        **kwargs,
    ) -> str:
        """
        Generate completion from prompt.

        Args:
            prompt: The input text
            system: Optional system instruction selecting the behaviour
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature (0.0 = deterministic, 1.0 = creative)
            **kwargs: Provider-specific parameters

        Returns:
            Generated text

        Raises:
            ValidationError: If the prompt is empty
            LLMError: Provider-specific errors
        """
        pass

    @abstractmethod
    async def close(self):
        """
        Close any open connections.
        Providers without cleanup implement this as a no-op.
        """

    @staticmethod
    def build_messages(prompt: str, system: str | None = None) -> list[dict[str, str]]:
        """Build a chat message list with the system instruction first."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages
