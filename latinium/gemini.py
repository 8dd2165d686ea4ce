"""
Gemini gateway: turns a prompt into the model's raw text output.
"""

import logging
import time
from typing import Optional

from google import genai
from google.genai import types

from .config import Settings

logger = logging.getLogger(__name__)


class GeminiModel:
    """Lazily constructed google-genai client with a fixed generation config."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: Optional[genai.Client] = None

    @property
    def model_name(self) -> str:
        return self._settings.model_name

    def get_client(self) -> genai.Client:
        if self._client is None:
            if not self._settings.gemini_api_key:
                raise RuntimeError("GEMINI_API_KEY not set")
            http_options = None
            if self._settings.timeout_ms:
                http_options = types.HttpOptions(timeout=self._settings.timeout_ms)
            self._client = genai.Client(
                api_key=self._settings.gemini_api_key,
                http_options=http_options,
            )
        return self._client

    def generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            temperature=self._settings.temperature,
            top_p=self._settings.top_p,
            top_k=self._settings.top_k,
            max_output_tokens=self._settings.max_output_tokens,
        )

    def generate(self, prompt: str) -> str:
        """Blocking call; run it off the event loop."""
        cli = self.get_client()
        start_time = time.time()
        response = cli.models.generate_content(
            model=self._settings.model_name,
            contents=prompt,
            config=self.generation_config(),
        )
        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info("Gemini response from %s received in %dms", self._settings.model_name, elapsed_ms)
        return extract_response_text(response)


def extract_response_text(response) -> str:
    """Concatenate the text parts of the first candidate."""
    text = getattr(response, "text", None)
    if text:
        return text
    analysis_text = ""
    candidates = getattr(response, "candidates", None) or []
    if candidates and candidates[0].content and candidates[0].content.parts:
        for part in candidates[0].content.parts:
            if getattr(part, "text", None):
                analysis_text += part.text
    return analysis_text
