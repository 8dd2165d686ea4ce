"""
Request/Response Models.

Wire format is camelCase; attributes are snake_case with aliases.
Result models are lenient (extra keys allowed, most fields optional) since
the model output is only checked for structural sanity.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ErrorType = Literal[
    "rate_limit_error",
    "authentication_error",
    "timeout_error",
    "parsing_error",
    "unknown_error",
    "general_error",
]


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class AnalysisRequest(BaseModel):
    text: str = Field(..., min_length=1)
    stream: bool = False

    model_config = {
        "json_schema_extra": {"example": {"text": "Gallia est omnis divisa in partes tres"}}
    }


class WordMeaning(CamelModel):
    short: Optional[str] = None
    detailed: Optional[str] = None


class Morphology(CamelModel):
    # Nominal forms
    case: Optional[str] = None
    number: Optional[str] = None
    gender: Optional[str] = None
    # Verbal forms
    person: Optional[str] = None
    tense: Optional[str] = None
    mood: Optional[str] = None
    voice: Optional[str] = None
    # Adjectives and adverbs
    degree: Optional[str] = None


class WordRelationship(CamelModel):
    type: str
    related_word_index: int = Field(..., alias="relatedWordIndex")
    description: Optional[str] = None
    direction: Optional[Literal["from", "to"]] = None


class RelatedWords(CamelModel):
    synonyms: List[str] = []
    derived_forms: List[str] = Field(default_factory=list, alias="derivedForms")
    usage_examples: List[str] = Field(default_factory=list, alias="usageExamples")


class WordPosition(CamelModel):
    sentence_index: int = Field(..., alias="sentenceIndex")
    word_index: int = Field(..., alias="wordIndex")


class WordAnalysis(CamelModel):
    word: str
    part_of_speech: Optional[str] = Field(None, alias="partOfSpeech")
    lemma: Optional[str] = None
    meaning: Optional[WordMeaning] = None
    morphology: Morphology = Field(default_factory=Morphology)
    relationships: List[WordRelationship] = []
    related_words: Optional[RelatedWords] = Field(None, alias="relatedWords")
    position: Optional[WordPosition] = None
    role_in_sentence: Optional[str] = Field(None, alias="roleInSentence")
    notes: Optional[str] = None


class SentenceInfo(CamelModel):
    original: str
    translation: Optional[str] = None
    structure: Optional[str] = None


class AnalysisResult(CamelModel):
    words: List[WordAnalysis]
    sentences: Optional[List[SentenceInfo]] = None


class ErrorResponse(CamelModel):
    error: str
    details: Optional[str] = None
    error_type: ErrorType = Field(..., alias="errorType")
    retryable: bool = False
    suggestions: List[str] = []
    fallback: bool = False
    reset_in_ms: Optional[int] = Field(None, alias="resetInMs")
    reset_in_seconds: Optional[int] = Field(None, alias="resetInSeconds")
    raw_response: Optional[str] = Field(None, alias="rawResponse")

    def to_body(self) -> Dict:
        return self.model_dump(by_alias=True, exclude_none=True)
