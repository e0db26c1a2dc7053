"""
Tests for the text transform service.
"""
import pytest

from smartnotes.services.text_transform import (
    DEFAULT_TITLE,
    ENHANCE_INSTRUCTION,
    GRAMMAR_INSTRUCTION,
    TITLE_INSTRUCTION,
    TONE_INSTRUCTIONS,
    TextTransformService,
    Tone,
    TransformKind,
    clean_text,
    clean_title,
)
from smartnotes.utils.exceptions import LLMError
from tests.fakes import FakeLLM


@pytest.mark.unit
class TestCleanText:
    """Test sanitising of model output."""

    def test_plain_text_is_trimmed(self):
        assert clean_text("  hello world \n") == "hello world"

    def test_markdown_fence_removed(self):
        """Test a wrapping ```markdown fence is stripped."""
        assert clean_text("```markdown\n# Title\nBody\n```") == "# Title\nBody"

    def test_fence_language_is_case_insensitive(self):
        assert clean_text("```HTML\n<p>hi</p>\n```") == "<p>hi</p>"

    def test_bare_fence_removed(self):
        assert clean_text("```\ncode\n```") == "code"

    def test_other_language_fence_kept(self):
        """Test only markdown, html and text fences are recognised."""
        assert clean_text("```python\nx = 1\n```") == "```python\nx = 1"

    def test_inner_fences_untouched(self):
        """Test fences in the middle of the text stay."""
        text = "Intro\n```\ncode\n```\nOutro"
        assert clean_text(text) == text

    def test_empty_output(self):
        assert clean_text("") == ""
        assert clean_text(None) == ""

    def test_clean_title_strips_quotes(self):
        """Test one pair of wrapping quotes is removed."""
        assert clean_title('"Weekly Plan"') == "Weekly Plan"
        assert clean_title("'Weekly Plan'") == "Weekly Plan"

    def test_clean_title_keeps_inner_quotes(self):
        assert clean_title('The "Big" Idea') == 'The "Big" Idea'


@pytest.mark.unit
@pytest.mark.asyncio
class TestTextTransformService:
    """Test the four transforms against a fake provider."""

    async def test_enhance(self):
        """Test enhance uses its instruction and cleans the reply."""
        llm = FakeLLM("```text\nBetter text\n```")
        service = TextTransformService(llm)

        assert await service.enhance("bad text") == "Better text"
        assert llm.requests[0]["system"] == ENHANCE_INSTRUCTION
        assert llm.requests[0]["prompt"] == "bad text"

    async def test_fix_grammar(self):
        llm = FakeLLM("I have two cats.")
        service = TextTransformService(llm)

        assert await service.fix_grammar("I has two cat.") == "I have two cats."
        assert llm.requests[0]["system"] == GRAMMAR_INSTRUCTION

    @pytest.mark.parametrize("tone", list(Tone))
    async def test_change_tone(self, tone):
        """Test each tone selects its instruction and forbids Markdown."""
        llm = FakeLLM("rewritten")
        service = TextTransformService(llm)

        assert await service.change_tone("hey there", tone.value) == "rewritten"
        system = llm.requests[0]["system"]
        assert system.startswith(TONE_INSTRUCTIONS[tone])
        assert system.endswith("without Markdown.")

    async def test_change_tone_unknown(self):
        service = TextTransformService(FakeLLM())
        with pytest.raises(ValueError):
            await service.change_tone("text", "sarcastic")

    async def test_generate_title(self):
        llm = FakeLLM('"Shopping List"')
        service = TextTransformService(llm)

        assert await service.generate_title("milk, eggs") == "Shopping List"
        assert llm.requests[0]["system"] == TITLE_INSTRUCTION

    async def test_generate_title_blank_content(self):
        """Test blank content yields the default title without a request."""
        llm = FakeLLM()
        service = TextTransformService(llm)

        assert await service.generate_title("   ") == DEFAULT_TITLE
        assert llm.requests == []

    async def test_generate_title_empty_reply(self):
        """Test a reply that cleans to nothing yields the default title."""
        service = TextTransformService(FakeLLM('""'), default_title="Untitled")
        assert await service.generate_title("content") == "Untitled"

    async def test_blank_text_is_returned_unchanged(self):
        """Test blank input never reaches the provider."""
        llm = FakeLLM()
        service = TextTransformService(llm)

        assert await service.enhance("  ") == "  "
        assert await service.fix_grammar("") == ""
        assert await service.change_tone("\n", Tone.INFORMAL) == "\n"
        assert llm.requests == []

    async def test_empty_reply_falls_back_to_input(self):
        service = TextTransformService(FakeLLM("```\n\n```"))
        assert await service.enhance("original") == "original"

    async def test_provider_error_propagates(self):
        """Test LLMError reaches the caller."""
        service = TextTransformService(FakeLLM(fail=True))
        with pytest.raises(LLMError):
            await service.enhance("text")

    async def test_request_parameters(self):
        """Test configured sampling parameters are forwarded."""
        llm = FakeLLM("ok")
        service = TextTransformService(llm, max_tokens=300, temperature=0.4)

        await service.fix_grammar("text")

        assert llm.requests[0]["max_tokens"] == 300
        assert llm.requests[0]["temperature"] == 0.4

    async def test_transform_dispatch(self):
        """Test transform routes each kind."""
        llm = FakeLLM("out")
        service = TextTransformService(llm)

        assert await service.transform(TransformKind.ENHANCE, "in") == "out"
        assert await service.transform("grammar", "in") == "out"
        assert await service.transform("title", "in") == "out"
        assert await service.transform("tone", "in", "professional") == "out"
        assert [r["system"] for r in llm.requests[:3]] == [
            ENHANCE_INSTRUCTION,
            GRAMMAR_INSTRUCTION,
            TITLE_INSTRUCTION,
        ]

    async def test_transform_tone_requires_tone(self):
        service = TextTransformService(FakeLLM())
        with pytest.raises(ValueError, match="tone is required"):
            await service.transform(TransformKind.TONE, "text")
