"""
LLM provider abstraction layer for text transforms.

Supported providers:
- Ollama (native SDK)
- OpenAI (official SDK)
"""
from smartnotes.core.llm.base import LLMProvider
from smartnotes.core.llm.ollama import OllamaLLM
from smartnotes.core.llm.openai import OpenAILLM

__all__ = [
    "LLMProvider",
    "OllamaLLM",
    "OpenAILLM",
]
