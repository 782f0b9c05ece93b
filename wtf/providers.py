import json
import logging
import time
from typing import Any, Dict

import requests

from .config import Config
from .errors import MalformedResponse, NetworkError, UpstreamError
from .prompt import BuiltPrompt

# Configure logging
logger = logging.getLogger(__name__)

MAX_ERROR_BODY = 500


class Provider:
    """
    One remote LLM API.

    Subclasses describe the request shape (``build_request``) and where the
    text lives in the response (``parse_response``). ``translate`` does the
    single round trip shared by both; failures are reported, never retried.
    """

    name = "provider"

    def __init__(self, config: Config):
        self.config = config

    def build_request(self, prompt: BuiltPrompt) -> Dict[str, Any]:
        raise NotImplementedError

    def parse_response(self, payload: Any) -> str:
        raise NotImplementedError

    def translate(self, prompt: BuiltPrompt) -> str:
        """
        Sends the prompt and returns the model's raw text.

        Raises:
            NetworkError: The request did not complete.
            UpstreamError: The provider answered with a non-2xx status.
            MalformedResponse: The body has no usable text.
        """
        request = self.build_request(prompt)
        logger.info(f"Requesting command from {self.name} (model: {self.config.model})")
        started = time.monotonic()
        try:
            response = requests.post(
                request["url"],
                params=request.get("params"),
                headers=request.get("headers"),
                json=request["json"],
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            message = self._redact(str(e)) or e.__class__.__name__
            logger.error(f"Request to {self.name} failed: {message}")
            raise NetworkError(f"could not reach {self.name}: {message}") from e

        logger.info(f"{self.name} answered HTTP {response.status_code} in {time.monotonic() - started:.2f}s")
        if not 200 <= response.status_code < 300:
            raise UpstreamError(response.status_code, self._redact(response.text[:MAX_ERROR_BODY]))

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponse(f"{self.name} returned a non-JSON body") from e
        return self.parse_response(payload)

    def _redact(self, text: str) -> str:
        if self.config.api_key:
            text = text.replace(self.config.api_key, "***")
        return text


class GeminiProvider(Provider):
    """Google Gemini ``generateContent`` endpoint. The default provider."""

    name = "Gemini"

    def build_request(self, prompt: BuiltPrompt) -> Dict[str, Any]:
        return {
            "url": f"{self.config.endpoint}/models/{self.config.model}:generateContent",
            "params": {"key": self.config.api_key},
            "headers": {"Content-Type": "application/json"},
            "json": {
                "contents": [{"role": "user", "parts": [{"text": prompt.user}]}],
                "systemInstruction": {"parts": [{"text": prompt.system}]},
                "generationConfig": {"temperature": 0},
            },
        }

    def parse_response(self, payload: Any) -> str:
        if not isinstance(payload, dict):
            raise MalformedResponse("Gemini response is not a JSON object")

        error = payload.get("error")
        if error:
            # Some proxies report errors with a 200 status.
            message = str(error.get("message") or "") if isinstance(error, dict) else str(error)
            status = error.get("code", 200) if isinstance(error, dict) else 200
            raise UpstreamError(status if isinstance(status, int) else 200, message[:MAX_ERROR_BODY])

        candidates = payload.get("candidates")
        if not candidates or not isinstance(candidates, list):
            reason = (payload.get("promptFeedback") or {}).get("blockReason")
            if reason:
                raise MalformedResponse(f"Gemini returned no candidates (blocked: {reason})")
            raise MalformedResponse("Gemini returned no candidates")

        try:
            parts = candidates[0]["content"]["parts"]
            texts = [part["text"] for part in parts if isinstance(part, dict) and "text" in part]
        except (KeyError, TypeError, IndexError) as e:
            logger.debug(f"Unexpected Gemini payload: {json.dumps(payload)[:MAX_ERROR_BODY]}")
            raise MalformedResponse("Gemini candidate has no content parts") from e

        if not texts or not all(isinstance(text, str) for text in texts):
            raise MalformedResponse("Gemini candidate has no text")
        return "".join(texts)


class OpenAICompatibleProvider(Provider):
    """Any server exposing the OpenAI ``chat/completions`` API."""

    name = "OpenAI-compatible API"

    def build_request(self, prompt: BuiltPrompt) -> Dict[str, Any]:
        return {
            "url": f"{self.config.endpoint}/chat/completions",
            "headers": {
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
            },
            "json": {
                "model": self.config.model,
                "messages": [
                    {"role": "system", "content": prompt.system},
                    {"role": "user", "content": prompt.user},
                ],
                "temperature": 0,
            },
        }

    def parse_response(self, payload: Any) -> str:
        if not isinstance(payload, dict):
            raise MalformedResponse("chat completion response is not a JSON object")

        choices = payload.get("choices")
        if not choices or not isinstance(choices, list):
            raise MalformedResponse("chat completion returned no choices")

        try:
            content = choices[0]["message"]["content"]
        except (KeyError, TypeError) as e:
            raise MalformedResponse("chat completion choice has no message content") from e

        if isinstance(content, list):
            # Content given as typed parts.
            content = "".join(
                part.get("text", "") for part in content
                if isinstance(part, dict) and part.get("type") == "text"
            )
        if not isinstance(content, str):
            raise MalformedResponse("chat completion message content is not text")
        return content


PROVIDERS = {
    "gemini": GeminiProvider,
    "openai": OpenAICompatibleProvider,
}


def get_provider(config: Config) -> Provider:
    """Returns the provider matching the configured mode."""
    return PROVIDERS[config.provider](config)
