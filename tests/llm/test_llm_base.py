"""
Tests for LLM base class.
"""
import pytest

from smartnotes.core.llm.base import LLMProvider


class MockLLM(LLMProvider):
    """Mock LLM provider for testing."""

    async def complete(self, prompt: str, system=None, **kwargs):
        messages = self.build_messages(prompt, system)
        return " | ".join(message["content"] for message in messages)

    async def close(self):
        """Mock close implementation."""
        pass


@pytest.mark.unit
@pytest.mark.asyncio
class TestLLMProviderBase:
    """Test base LLM provider functionality."""

    async def test_abstract_instantiation(self):
        """Test that abstract class cannot be instantiated."""
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            LLMProvider()

    async def test_complete_interface(self):
        """Test complete method interface."""
        provider = MockLLM()
        result = await provider.complete("test prompt")
        assert result == "test prompt"

    async def test_complete_with_system(self):
        """Test the system instruction comes before the prompt."""
        provider = MockLLM()
        result = await provider.complete("text", system="fix it", max_tokens=100, temperature=0.7)
        assert result == "fix it | text"

    async def test_build_messages_without_system(self):
        """Test only a user message is built without instruction."""
        assert LLMProvider.build_messages("hello") == [{"role": "user", "content": "hello"}]

    async def test_build_messages_with_system(self):
        """Test the system message is first."""
        messages = LLMProvider.build_messages("hello", "be formal")
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[0]["content"] == "be formal"

    async def test_close_default(self):
        """Test default close implementation."""
        provider = MockLLM()
        await provider.close()  # Should not raise
