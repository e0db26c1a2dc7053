"""
Text Transform Service - AI-assisted rewrites of note text.

Handles:
- Enhancing text (grammar, clarity, flow)
- Strict grammar/spelling fixes
- Tone rewrites (formal, professional, informal)
- Title generation

The instructions are policy; the engine only sees text in, text out.
"""

import re
from enum import Enum

from smartnotes.core.llm.base import LLMProvider
from smartnotes.utils.exceptions import LLMError
from smartnotes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TITLE = "New Note"

ENHANCE_INSTRUCTION = (
    "You are an expert text editor. Improve the given text: fix the grammar, improve "
    "clarity and flow, and format it better where needed. Keep the original language. "
    "Return ONLY the improved text, without introductions, quotes or explanations."
)

GRAMMAR_INSTRUCTION = (
    "You are a strict proofreader. Fix only grammar, spelling and punctuation errors in "
    "the given text. Do NOT change style, tone or sentence structure unless it is "
    "grammatically wrong. Keep the original language. Return ONLY the corrected text."
)

TITLE_INSTRUCTION = (
    "Generate a short, concise and descriptive title (at most 5 words) for the given "
    "text, in the language of the text. Return ONLY the title, without quotes."
)

_LEADING_FENCE = re.compile(r"^```(markdown|html|text)?\n", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n```$")
_WRAPPING_QUOTES = re.compile(r"^[\"']|[\"']$")


class Tone(str, Enum):
    """Target tone for rewrites."""

    FORMAL = "formal"
    PROFESSIONAL = "professional"
    INFORMAL = "informal"


TONE_INSTRUCTIONS = {
    Tone.FORMAL: (
        "Rewrite the following text in a formal, cultivated and respectful tone. Use "
        "suitable vocabulary and elegant sentence structures. Keep the original meaning."
    ),
    Tone.PROFESSIONAL: (
        "Rewrite the following text in a professional, corporate and objective tone. Be "
        "clear and direct, suitable for the workplace. Keep the original meaning."
    ),
    Tone.INFORMAL: (
        "Rewrite the following text in an informal, conversational and friendly tone, as "
        "if talking to a friend. Keep the original meaning."
    ),
}


class TransformKind(str, Enum):
    """Transforms exposed to the editor."""

    ENHANCE = "enhance"
    GRAMMAR = "grammar"
    TONE = "tone"
    TITLE = "title"


def clean_text(text: str | None) -> str:
    """
    Strip a wrapping code fence and surrounding whitespace from model output.

    Args:
        text: Raw model output

    Returns:
        Sanitised text ("" for empty output)
    """
    if not text:
        return ""
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def clean_title(text: str | None) -> str:
    """Sanitise a generated title: fences, whitespace and one pair of wrapping quotes."""
    return _WRAPPING_QUOTES.sub("", clean_text(text)).strip()


class TextTransformService:
    """
    Runs note text through the configured LLM provider.

    Blank input never reaches the provider. Provider failures propagate as
    LLMError so the caller can alert the user and leave the note untouched.
    """

    def __init__(
        self,
        llm: LLMProvider,
        default_title: str = DEFAULT_TITLE,
        max_tokens: int = 2000,
        temperature: float = 0.0,
    ):
        """
        Initialize the transform service.

        Args:
            llm: LLM provider used for every transform
            default_title: Title returned for blank content or empty output
            max_tokens: Generation limit per request
            temperature: Sampling temperature per request
        """
        self.llm = llm
        self.default_title = default_title
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def _run(self, text: str, instruction: str, operation: str) -> str:
        try:
            return await self.llm.complete(
                text,
                system=instruction,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except LLMError as e:
            logger.error(
                f"Text transform '{operation}' failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise

    async def enhance(self, text: str) -> str:
        """Improve grammar, clarity and flow of the text."""
        if not text.strip():
            return text
        result = await self._run(text, ENHANCE_INSTRUCTION, "enhance")
        return clean_text(result) or text

    async def fix_grammar(self, text: str) -> str:
        """Fix grammar, spelling and punctuation only."""
        if not text.strip():
            return text
        result = await self._run(text, GRAMMAR_INSTRUCTION, "grammar")
        return clean_text(result) or text

    async def change_tone(self, text: str, tone: Tone | str) -> str:
        """
        Rewrite the text in another tone.

        Args:
            text: Note content
            tone: formal, professional or informal

        Raises:
            ValueError: If the tone is unknown
            LLMError: If the provider fails
        """
        if not text.strip():
            return text
        tone = Tone(tone)
        instruction = f"{TONE_INSTRUCTIONS[tone]} Return ONLY the rewritten text, without Markdown."
        result = await self._run(text, instruction, f"tone:{tone.value}")
        return clean_text(result) or text

    async def generate_title(self, content: str) -> str:
        """Generate a title of at most five words for the content."""
        if not content.strip():
            return self.default_title
        result = await self._run(content, TITLE_INSTRUCTION, "title")
        return clean_title(result) or self.default_title

    async def transform(self, kind: TransformKind | str, text: str, tone: Tone | str | None = None) -> str:
        """
        Dispatch a transform by kind.

        Args:
            kind: enhance, grammar, tone or title
            text: Input text (note content)
            tone: Required when kind is tone

        Raises:
            ValueError: If kind is unknown or tone is missing for a tone rewrite
            LLMError: If the provider fails
        """
        kind = TransformKind(kind)
        if kind == TransformKind.ENHANCE:
            return await self.enhance(text)
        if kind == TransformKind.GRAMMAR:
            return await self.fix_grammar(text)
        if kind == TransformKind.TITLE:
            return await self.generate_title(text)
        if tone is None:
            raise ValueError("A tone is required for tone rewrites")
        return await self.change_tone(text, tone)
