"""Generative model clients.

Every client exposes ``generate(prompt) -> dict``: it sends the prompt, takes
the raw text answer and parses it as a JSON object. Ollama (local) is the
default; Gemini can be selected with ``LLM_PROVIDER=gemini``.
"""

import json
import re
from typing import Dict

import google.api_core.exceptions as google_exceptions
import google.generativeai as genai
import requests
from loguru import logger

from backend import config
from backend.errors import ParseError, UpstreamError, WorkoutError

CODE_FENCE_PATTERN = re.compile(r"```json\n?|```\n?")

OLLAMA_UNAVAILABLE_MESSAGE = "Ollama API request failed. Make sure Ollama is running."


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences the model may wrap its JSON in."""
    return CODE_FENCE_PATTERN.sub("", text).strip()


def parse_model_json(raw: str) -> Dict:
    """Parse a model answer into a dict, tolerating fences and chatter around it."""
    text = strip_code_fences(raw or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # fall back to the outermost object in the answer
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            logger.error(f"Model returned non-JSON output: {text[:200]!r}")
            raise ParseError("The AI model returned an invalid response. Please try again.")
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError as e:
            logger.error(f"Model returned non-JSON output: {text[:200]!r}")
            raise ParseError("The AI model returned an invalid response. Please try again.") from e

    if not isinstance(data, dict):
        raise ParseError("The AI model returned an unexpected response. Please try again.")
    return data


class OllamaClient:
    """Calls a locally running Ollama server."""

    def __init__(self, host=None, model=None, timeout=None):
        self.host = (host or config.OLLAMA_HOST).rstrip("/")
        self.model = model or config.OLLAMA_MODEL
        self.timeout = timeout or config.REQUEST_TIMEOUT

    def generate(self, prompt: str) -> Dict:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
        }
        logger.debug(f"Ollama request: model={self.model}, prompt length={len(prompt)}")
        try:
            response = requests.post(f"{self.host}/api/generate", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Could not reach Ollama at {self.host}: {e}")
            raise UpstreamError(OLLAMA_UNAVAILABLE_MESSAGE) from e

        if not response.ok:
            logger.error(f"Ollama answered {response.status_code}: {response.text[:200]}")
            raise UpstreamError(OLLAMA_UNAVAILABLE_MESSAGE)

        try:
            text = response.json()["response"]
        except (ValueError, KeyError, TypeError) as e:
            raise ParseError("The AI model returned an invalid response. Please try again.") from e
        return parse_model_json(text)


class GeminiClient:
    """Calls Google's hosted Gemini models."""

    def __init__(self, api_key=None, model=None):
        api_key = api_key or config.GEMINI_API_KEY
        if not api_key:
            raise UpstreamError("Gemini API key not found. Please set GEMINI_API_KEY in your .env file.")
        genai.configure(api_key=api_key)
        self.model = model or config.GEMINI_MODEL

    def generate(self, prompt: str) -> Dict:
        logger.debug(f"Gemini request: model={self.model}, prompt length={len(prompt)}")
        try:
            model = genai.GenerativeModel(self.model)
            response = model.generate_content(
                prompt,
                generation_config={
                    "temperature": 0.3,  # Lower for more factual responses
                    "max_output_tokens": 2048,
                    "response_mime_type": "application/json",
                },
            )
            text = response.text
        except (google_exceptions.GoogleAPIError, ValueError) as e:
            logger.error(f"Gemini API error: {type(e).__name__}: {e}")
            raise UpstreamError(f"Gemini API error: {e}") from e
        return parse_model_json(text)


def get_model_client(provider=None):
    """Build the model client selected by LLM_PROVIDER."""
    provider = (provider or config.LLM_PROVIDER).lower()
    if provider not in config.SUPPORTED_PROVIDERS:
        raise WorkoutError(f"Unsupported LLM provider. Choose from: {config.SUPPORTED_PROVIDERS}")
    if provider == "gemini":
        return GeminiClient()
    return OllamaClient()
