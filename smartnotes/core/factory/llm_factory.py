"""
Factory wiring the configured LLM backend into the text transform service.
"""

from collections.abc import Callable

from smartnotes.config import EngineConfig, LLMConfig
from smartnotes.core.llm.base import LLMProvider
from smartnotes.core.llm.ollama import OllamaLLM
from smartnotes.core.llm.openai import OpenAILLM
from smartnotes.services.text_transform import TextTransformService

# Ollama's default URL doubles as "unset" for OpenAI
LLM_DEFAULT_BASE_URL = LLMConfig().base_url


def _build_ollama(config: LLMConfig) -> LLMProvider:
    return OllamaLLM(host=config.base_url, model=config.model, timeout=config.timeout)


def _build_openai(config: LLMConfig) -> LLMProvider:
    if not config.api_key:
        raise ValueError("OpenAI API key is required for text transforms")
    base_url = None if config.base_url == LLM_DEFAULT_BASE_URL else config.base_url
    return OpenAILLM(
        api_key=config.api_key, model=config.model, base_url=base_url, timeout=config.timeout
    )


class LLMFactory:
    """Builds transform backends by provider name."""

    builders: dict[str, Callable[[LLMConfig], LLMProvider]] = {
        "ollama": _build_ollama,
        "openai": _build_openai,
    }

    @classmethod
    def providers(cls) -> list[str]:
        return sorted(cls.builders)

    @classmethod
    def create(cls, config: LLMConfig) -> LLMProvider:
        """
        Build the provider named in the config.

        Provider names are matched case-insensitively.

        Raises:
            ValueError: If the provider is unknown or misses its credentials
        """
        name = config.provider.strip().lower()
        builder = cls.builders.get(name)
        if builder is None:
            raise ValueError(
                f"Unsupported LLM provider: {config.provider!r} "
                f"(expected one of {', '.join(cls.providers())})"
            )
        return builder(config)

    @classmethod
    def create_transform_service(
        cls, llm_config: LLMConfig, engine_config: EngineConfig
    ) -> TextTransformService:
        """Build the provider and the transform service that drives it."""
        return TextTransformService(
            cls.create(llm_config),
            default_title=engine_config.default_title,
            max_tokens=llm_config.max_tokens,
            temperature=llm_config.temperature,
        )
