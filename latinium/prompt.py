"""Prompt construction for Latin grammatical analysis."""

SYSTEM_INSTRUCTIONS = """You are Latinium, an expert Latin language analysis system that specializes in
detailed grammatical analysis of Latin texts. Your purpose is to provide accurate,
comprehensive breakdowns of Latin passages with particular attention to:

1. Precise morphological analysis of each word
2. Clear identification of syntactic relationships between words
3. Accurate lemmatization and dictionary forms
4. Contextually appropriate translations and meanings
5. Detailed explanation of grammatical constructions

You should analyze text with classical Latin grammar rules in mind, noting any
post-classical or medieval variations when relevant. Always return data in a clean,
structured JSON format exactly as specified in the prompt, with no additional text,
explanations, or markdown formatting."""

ANALYSIS_SCHEMA = """
LatinAnalysis = {
  "words": Array<{
    "word": string,  // Original Latin word as it appears in text
    "partOfSpeech": string,  // e.g., "noun", "verb", "adjective", "adverb", "preposition", "conjunction", "pronoun"
    "lemma": string,  // Dictionary form of the word
    "meaning": {
      "short": string,  // Brief definition (1-3 words)
      "detailed": string  // More complete definition explaining usage and context
    },
    "morphology": {
      // For nouns:
      "case"?: "nominative"|"genitive"|"dative"|"accusative"|"ablative"|"vocative",
      "number"?: "singular"|"plural",
      "gender"?: "masculine"|"feminine"|"neuter",

      // For verbs:
      "person"?: "1"|"2"|"3",
      "number"?: "singular"|"plural",
      "tense"?: "present"|"imperfect"|"future"|"perfect"|"pluperfect"|"future perfect",
      "mood"?: "indicative"|"subjunctive"|"imperative"|"infinitive",
      "voice"?: "active"|"passive",

      // For adjectives/adverbs:
      "degree"?: "positive"|"comparative"|"superlative"
    },
    "relationships": Array<{
      "type": string,  // e.g., "subject-verb", "verb-object", "adjective-noun"
      "relatedWordIndex": number,  // Index of related word in the array
      "description": string,  // Brief explanation of relationship
      "direction": "from"|"to"  // Whether this word points to another or is pointed to
    }>,
    "relatedWords": {
      "synonyms": Array<string>,
      "derivedForms": Array<string>,
      "usageExamples": Array<string>
    },
    "position": {
      "sentenceIndex": number,  // Index of the sentence in the text
      "wordIndex": number  // Index of the word within its sentence
    }
  }>,
  "sentences"?: Array<{
    "original": string,  // The original Latin sentence
    "translation"?: string,  // An English translation
    "structure"?: string  // Description of sentence structure
  }>
}
Return: LatinAnalysis
"""

ANALYSIS_RULES = """Important rules for analysis:
1. For each word, identify ALL grammatical relationships with other words
2. For verbs, identify subjects and objects with precise relationship descriptions
3. For adjectives, identify the nouns they modify
4. For prepositions, identify their objects
5. For relationships, use "direction": "from" when the word acts on another (e.g., verb -> object)
   and "direction": "to" when it is acted upon (e.g., subject -> verb)
6. Ensure bidirectional relationships are captured (if word A relates to word B, word B should also relate to word A)
7. Number words starting from 0 for each analysis type (wordIndex and relatedWordIndex)
8. Include position data for enabling UI visualization features"""


def build_analysis_prompt(text: str) -> str:
    # Text goes in verbatim; no escaping is applied
    return (
        f"{SYSTEM_INSTRUCTIONS}\n\n"
        "Analyze the following Latin text and provide a comprehensive grammatical "
        "breakdown following this schema:\n\n"
        f"{ANALYSIS_SCHEMA}\n\n"
        f"{ANALYSIS_RULES}\n\n"
        f'Latin text to analyze: "{text}"\n'
    )
