"""
Grammar Checker - Gemini-backed grammar and spelling review
Translation Hub - Provider Clients
"""

from config.constants import GRAMMAR_FALLBACK_MESSAGE, GRAMMAR_GENERATION_CONFIG
from config.logging_config import get_logger
from core.exceptions import ErrorKind, ProviderError
from core.language import get_language_name
from core.models import TranslationResult

from .gemini import GeminiProvider

logger = get_logger(__name__)


def build_grammar_prompt(text: str, language: str) -> str:
    return f"""Please check the following text for grammar and spelling errors in {get_language_name(language)}.
If there are errors, list each error with a correction suggestion.
If there are no errors, respond with "No errors found."

Text: "{text}"

Format your response as follows:
1. Error: [incorrect text] -> Correction: [corrected text] - Explanation: [brief explanation]
2. Error: [incorrect text] -> Correction: [corrected text] - Explanation: [brief explanation]
...and so on."""


class GrammarChecker(GeminiProvider):
    """Returns the model's review as plain text"""

    async def check_grammar(self, text: str, language: str) -> TranslationResult:
        if not text or not text.strip():
            return TranslationResult.ok("")
        if not self.api_key:
            return TranslationResult.error(ErrorKind.AUTH, "Gemini API key is not configured")

        try:
            review = await self.generate(
                self.settings.grammar_model,
                build_grammar_prompt(text, language),
                generation_config=GRAMMAR_GENERATION_CONFIG,
            )
        except ProviderError as e:
            return TranslationResult.from_exception(e)

        return TranslationResult.ok(review or GRAMMAR_FALLBACK_MESSAGE)
