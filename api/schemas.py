"""
Pydantic models for the Translation Hub API
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from core.language import AUTO_DETECT, DEFAULT_TARGET


class TranslateRequest(BaseModel):
    """Request model for text translation"""
    text: str = Field(..., description="Text to translate")
    source_lang: str = Field(default=AUTO_DETECT, description="Source language code or 'auto'")
    target_lang: str = Field(default=DEFAULT_TARGET, description="Target language code")


class TranslateResponse(BaseModel):
    text: str
    source_lang: str
    target_lang: str


class GrammarRequest(BaseModel):
    text: str = Field(..., description="Text to check")
    language: str = Field(default="en", description="Language of the text")


class GrammarResponse(BaseModel):
    result: str


class AnalyzeRequest(BaseModel):
    text: str = Field(..., description="Word or phrase to analyze")
    language: str = Field(default="en", description="Language of the text")


class WordInfoModel(BaseModel):
    word: str
    phonetic: str = ""
    type: str = ""
    definition: str = ""


class AnalyzeResponse(BaseModel):
    words: List[WordInfoModel] = Field(default_factory=list)


class LanguageModel(BaseModel):
    code: str
    name: str
    display_name: str


class LanguagesResponse(BaseModel):
    source: List[LanguageModel]
    target: List[LanguageModel]


class CredentialModel(BaseModel):
    exists: bool
    valid: bool


class HealthResponse(BaseModel):
    status: str
    version: str
    credentials: Dict[str, CredentialModel]
    config: Dict[str, object]


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
