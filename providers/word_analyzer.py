"""
Word Analyzer - Gemini-backed extraction of important words
Translation Hub - Provider Clients

Never raises: any transport, HTTP or parsing failure yields an empty analysis.
"""

import json
import re
from typing import Any, Dict, List
from dataclasses import dataclass, field, asdict

from config.logging_config import get_logger
from core.exceptions import ProviderError
from core.language import get_language_name

from .gemini import GeminiProvider

logger = get_logger(__name__)

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


@dataclass
class WordInfo:
    """One analysed word"""
    word: str
    phonetic: str = ""
    type: str = ""
    definition: str = ""


@dataclass
class WordAnalysis:
    """Analysis result; empty when the provider fails"""
    words: List[WordInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"words": [asdict(w) for w in self.words]}


def build_analysis_prompt(text: str, language: str) -> str:
    if language == "en":
        return f"""Analyze the following English text and identify important words (nouns, verbs, adjectives, adverbs):
"{text}"

Return a JSON object with the following structure:
{{
  "words": [
    {{
      "word": "example",
      "phonetic": "ɪɡˈzæmpəl",
      "type": "noun/verb/adjective/adverb",
      "definition": "short definition"
    }}
  ]
}}

Only include content words and only return the JSON without any explanation."""

    if language == "vi":
        return f"""Phân tích văn bản tiếng Việt sau và xác định các từ quan trọng (danh từ, động từ, tính từ, trạng từ):
"{text}"

Trả về một đối tượng JSON với cấu trúc sau:
{{
  "words": [
    {{
      "word": "ví dụ",
      "phonetic": "ví zụ",
      "type": "danh từ/động từ/tính từ/trạng từ",
      "definition": "định nghĩa ngắn gọn"
    }}
  ]
}}

Chỉ bao gồm các từ nội dung và chỉ trả về JSON mà không có bất kỳ giải thích nào."""

    return f"""Analyze the following text in {get_language_name(language)} and identify important words:
"{text}"

Return a JSON object with the following structure:
{{
  "words": [
    {{
      "word": "example",
      "phonetic": "pronunciation",
      "type": "word type",
      "definition": "short definition"
    }}
  ]
}}

Only include content words and only return the JSON without any explanation."""


def parse_analysis(raw: str) -> WordAnalysis:
    """Parse the first brace-delimited block of a model answer."""
    match = _JSON_BLOCK.search(raw or "")
    if not match:
        return WordAnalysis()
    try:
        payload = json.loads(match.group(0))
    except ValueError as e:
        logger.warning(f" Failed to parse word analysis JSON: {e}")
        return WordAnalysis()

    entries = payload.get("words") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return WordAnalysis()

    words = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("word"):
            continue
        words.append(WordInfo(
            word=str(entry["word"]),
            phonetic=str(entry.get("phonetic", "")),
            type=str(entry.get("type", "")),
            definition=str(entry.get("definition", "")),
        ))
    return WordAnalysis(words=words)


class WordAnalyzer(GeminiProvider):

    async def analyze(self, text: str, language: str) -> WordAnalysis:
        if not text or not text.strip():
            return WordAnalysis()
        if not self.api_key:
            logger.warning(" Gemini API key is not configured, skipping word analysis")
            return WordAnalysis()

        try:
            raw = await self.generate(
                self.settings.analysis_model,
                build_analysis_prompt(text, language),
            )
        except ProviderError as e:
            logger.error(f" Word analysis error: {e.message}")
            return WordAnalysis()

        return parse_analysis(raw or "{}")
