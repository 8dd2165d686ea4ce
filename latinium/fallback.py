"""
Placeholder analysis used by the client when the server signals `fallback`.

Parts of speech are guessed from word endings only; the result exists so a
reader still gets a word-by-word layout while the model is unavailable.
"""

from typing import Dict

from .schemas import (
    AnalysisResult,
    Morphology,
    RelatedWords,
    WordAnalysis,
    WordMeaning,
    WordPosition,
    WordRelationship,
)

_VERB_ENDINGS = ("re", "ri", "t")
_ADJECTIVE_ENDINGS = ("us", "is", "um")
_ADVERB_ENDINGS = ("e", "iter")

_VERB_MORPHOLOGY: Dict[str, str] = {
    "person": "3",
    "number": "singular",
    "tense": "present",
    "mood": "indicative",
    "voice": "active",
}
_NOMINAL_MORPHOLOGY: Dict[str, str] = {
    "case": "nominative",
    "number": "singular",
    "gender": "masculine",
}


def guess_part_of_speech(word: str) -> str:
    if word.endswith(_VERB_ENDINGS):
        return "verb"
    if word.endswith(_ADJECTIVE_ENDINGS):
        return "adjective"
    if word.endswith(_ADVERB_ENDINGS):
        return "adverb"
    return "noun"


def placeholder_analysis(text: str) -> AnalysisResult:
    words = text.split()
    analyses = []
    for index, word in enumerate(words):
        part_of_speech = guess_part_of_speech(word)
        relationships = []
        if index > 0:
            relationships.append(
                WordRelationship(
                    type="verb-subject" if part_of_speech == "verb" else "adjective-noun",
                    related_word_index=index - 1,
                    description=f'Related to "{words[index - 1]}"',
                )
            )
        morphology = _VERB_MORPHOLOGY if part_of_speech == "verb" else _NOMINAL_MORPHOLOGY
        analyses.append(
            WordAnalysis(
                word=word,
                part_of_speech=part_of_speech,
                lemma=word.lower(),
                meaning=WordMeaning(
                    short=f"Mock {part_of_speech}",
                    detailed=f'Placeholder definition for the {part_of_speech} "{word}"; the analysis service was unavailable.',
                ),
                morphology=Morphology(**morphology),
                relationships=relationships,
                related_words=RelatedWords(),
                position=WordPosition(sentence_index=0, word_index=index),
            )
        )
    return AnalysisResult(words=analyses)
