"""Client for hosted text-generation endpoints (Gemini or OpenAI-compatible)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import LLMSettings
from ..logging import get_logger
from ..models import GenerationResult

logger = get_logger("llm")


class GenerationError(RuntimeError):
    """Raised by transports; converted into a failed result by the client."""


@dataclass
class LLMRequest:
    """Represents one inference request sent through a transport."""

    prompt: str
    provider: str
    model: str
    base_url: str
    api_key: Optional[str]
    temperature: Optional[float]
    max_tokens: Optional[int]
    request_timeout: float


Transport = Callable[[LLMRequest], str]


class GenerationClient:
    """Sends prompts to the configured backend and never raises on failure."""

    def __init__(
        self,
        settings: LLMSettings | None = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        self.settings = settings or LLMSettings()
        self._transport = transport or self._http_transport

    def generate(self, prompt: str) -> GenerationResult:
        """Return a tagged result; transport and payload errors become failures."""
        settings = self.settings
        request = LLMRequest(
            prompt=prompt,
            provider=settings.provider,
            model=settings.model,
            base_url=settings.base_url,
            api_key=settings.api_key,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            request_timeout=settings.request_timeout,
        )
        try:
            text = self._transport(request)
        except Exception as exc:
            logger.error("Generation request failed: %s", exc)
            return GenerationResult.failure(str(exc) or exc.__class__.__name__)
        if not isinstance(text, str):
            logger.error("Generation transport returned %s instead of text", type(text).__name__)
            return GenerationResult.failure("backend returned a non-text payload")
        return GenerationResult.success(text)

    def complete(self, prompt: str) -> str:
        """Return generated text, or the failure sentinel when generation failed."""
        return self.generate(prompt).as_text()

    @staticmethod
    def _http_transport(request: LLMRequest) -> str:
        if request.provider == "gemini" and not request.api_key:
            raise GenerationError("no API key configured (set GEMINI_API_KEY)")

        endpoint = GenerationClient._endpoint(request)
        payload = GenerationClient._build_payload(request)
        headers = {"Content-Type": "application/json"}
        if request.api_key:
            if request.provider == "gemini":
                headers["x-goog-api-key"] = request.api_key
            else:
                headers["Authorization"] = f"Bearer {request.api_key}"

        http_request = Request(
            endpoint,
            data=json.dumps(payload).encode("utf-8"),
            headers=headers,
            method="POST",
        )

        try:
            with urlopen(http_request, timeout=request.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = GenerationClient._error_message(detail) or exc.reason
            raise GenerationError(f"HTTP {exc.code}: {message}") from exc
        except TimeoutError as exc:
            raise GenerationError(f"request timed out after {request.request_timeout:g}s") from exc
        except URLError as exc:
            raise GenerationError(f"connection failed: {exc.reason}") from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise GenerationError("backend returned invalid JSON") from exc

        content = GenerationClient._extract_content(request.provider, response_payload)
        if not content:
            raise GenerationError("backend returned no generated text")
        return content

    @staticmethod
    def _endpoint(request: LLMRequest) -> str:
        base_url = request.base_url.rstrip("/")
        if request.provider == "gemini":
            return f"{base_url}/models/{request.model}:generateContent"
        return f"{base_url}/chat/completions"

    @staticmethod
    def _build_payload(request: LLMRequest) -> dict[str, object]:
        if request.provider == "gemini":
            payload: dict[str, object] = {"contents": [{"parts": [{"text": request.prompt}]}]}
            generation_config: dict[str, object] = {}
            if request.temperature is not None:
                generation_config["temperature"] = request.temperature
            if request.max_tokens is not None:
                generation_config["maxOutputTokens"] = request.max_tokens
            if generation_config:
                payload["generationConfig"] = generation_config
            return payload

        payload = {
            "model": request.model,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens
        return payload

    @staticmethod
    def _extract_content(provider: str, payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        if provider == "gemini":
            candidates = payload.get("candidates")
            if not isinstance(candidates, list) or not candidates:
                return ""
            first = candidates[0]
            content = first.get("content") if isinstance(first, dict) else None
            parts = content.get("parts") if isinstance(content, dict) else None
            if not isinstance(parts, list):
                return ""
            texts = [part.get("text") for part in parts if isinstance(part, dict)]
            return "".join(text for text in texts if isinstance(text, str))

        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"]
        text = first.get("text")
        return text if isinstance(text, str) else ""

    @staticmethod
    def _error_message(detail: str) -> str:
        detail = detail.strip()
        if not detail:
            return ""
        try:
            parsed = json.loads(detail)
        except json.JSONDecodeError:
            return detail
        error = parsed.get("error") if isinstance(parsed, dict) else None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        return detail


__all__ = ["GenerationClient", "GenerationError", "LLMRequest", "Transport"]
