import json


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubModel:
    """Stands in for GeminiModel; replays canned outputs and counts calls."""

    def __init__(self, *outputs) -> None:
        self.outputs = list(outputs)
        self.prompts = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        output = self.outputs[0] if len(self.outputs) == 1 else self.outputs.pop(0)
        if isinstance(output, BaseException):
            raise output
        return output


GALLIA_RESULT = {
    "words": [
        {
            "word": "Gallia",
            "partOfSpeech": "noun",
            "lemma": "Gallia",
            "meaning": {"short": "Gaul", "detailed": "The region of Gaul"},
            "morphology": {"case": "nominative", "number": "singular", "gender": "feminine"},
            "relationships": [
                {
                    "type": "subject-verb",
                    "relatedWordIndex": 1,
                    "description": "Subject of est",
                    "direction": "to",
                }
            ],
            "relatedWords": {"synonyms": [], "derivedForms": ["Gallus"], "usageExamples": []},
            "position": {"sentenceIndex": 0, "wordIndex": 0},
        }
    ],
    "sentences": [
        {"original": "Gallia est omnis divisa in partes tres", "translation": "All Gaul is divided into three parts"}
    ],
}


def fenced(payload) -> str:
    return "Here is the analysis:\n```json\n" + json.dumps(payload, indent=2) + "\n```\nHope this helps!"

