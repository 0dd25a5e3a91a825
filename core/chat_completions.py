"""OpenAI-compatible chat-completion adapters (Groq, DeepSeek)."""

from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

import requests

from core.config import Settings
from core.errors import ChatCompletionsError
from core.models import GenerationResult
from core.parsing import parse_movies
from core.prompts import build_system_prompt

logger = logging.getLogger(__name__)


def _extract_error_details(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:250]
    if not isinstance(payload, dict):
        return str(payload)
    if isinstance(payload.get("error"), dict):
        message = payload["error"].get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    if isinstance(payload.get("error"), str) and payload["error"].strip():
        return payload["error"].strip()
    if isinstance(payload.get("message"), str) and payload["message"].strip():
        return payload["message"].strip()
    return str(payload)


def _extract_chat_text(payload: Dict[str, Any]) -> str:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, dict):
                text = item.get("text")
                if isinstance(text, str) and text.strip():
                    parts.append(text.strip())
        return "\n".join(parts).strip()
    return ""


class ChatCompletionsAdapter:
    """One model behind an OpenAI-compatible ``/chat/completions`` endpoint."""

    def __init__(
        self,
        *,
        name: str,
        provider_id: str,
        label: str,
        base_url: str,
        model: str,
        api_key: str,
        key_name: str,
        timeout_seconds: float = 30.0,
        target_count: int = 4,
        temperature: float = 0.8,
    ) -> None:
        self.name = name
        self.provider_id = provider_id
        self.label = label
        self.model = model
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._api_key = api_key
        self._key_name = key_name
        self._timeout_seconds = timeout_seconds
        self._target_count = target_count
        self._temperature = temperature

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _post(self, payload: Dict[str, object]) -> Dict[str, Any]:
        try:
            response = requests.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json=payload,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ChatCompletionsError(
                f"{self.label} request failed: {type(exc).__name__}: {exc}"
            ) from exc

        if response.status_code >= 400:
            details = _extract_error_details(response)
            raise ChatCompletionsError(
                f"{self.label} API error (status={response.status_code}): {details}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise ChatCompletionsError(f"{self.label} returned invalid JSON.") from exc
        if not isinstance(body, dict):
            raise ChatCompletionsError(f"{self.label} returned unexpected response payload.")
        return body

    def generate(self, vibe_text: str, exclude: Sequence[str] = ()) -> GenerationResult:
        if not self.is_configured():
            raise ChatCompletionsError(f"{self._key_name} is not configured.")

        payload: Dict[str, object] = {
            "model": self.model,
            "messages": [
                {
                    "role": "system",
                    "content": build_system_prompt(
                        exclude,
                        count=self._target_count,
                        json_object=True,
                    ),
                },
                {"role": "user", "content": vibe_text},
            ],
            "response_format": {"type": "json_object"},
            "temperature": self._temperature,
        }
        logger.info("[%s] Trying %s...", self.label, self.model)
        body = self._post(payload)

        text = _extract_chat_text(body)
        if not text:
            raise ChatCompletionsError(f"Empty response from {self.label}")

        movies = parse_movies(text, min_count=self._target_count)
        logger.info("[%s] Success", self.label)
        return GenerationResult(movies=movies, provider=self.provider_id)


# Short labels for the stock models; any other model is reported as configured.
_MODEL_LABELS = {
    "llama-3.3-70b-versatile": "llama-3.3-70b",
    "deepseek-chat": "v3",
}


def _provider_id(vendor: str, model: str) -> str:
    return f"{vendor}:{_MODEL_LABELS.get(model, model)}"


def groq_adapter(settings: Settings) -> ChatCompletionsAdapter:
    return ChatCompletionsAdapter(
        name="groq",
        provider_id=_provider_id("groq", settings.groq_model),
        label="Groq",
        base_url=settings.groq_base_url,
        model=settings.groq_model,
        api_key=settings.groq_api_key,
        key_name="GROQ_API_KEY",
        timeout_seconds=settings.llm_timeout_seconds,
        target_count=settings.target_count,
    )


def deepseek_adapter(settings: Settings) -> ChatCompletionsAdapter:
    return ChatCompletionsAdapter(
        name="deepseek",
        provider_id=_provider_id("deepseek", settings.deepseek_model),
        label="DeepSeek",
        base_url=settings.deepseek_base_url,
        model=settings.deepseek_model,
        api_key=settings.deepseek_api_key,
        key_name="DEEPSEEK_API_KEY",
        timeout_seconds=settings.llm_timeout_seconds,
        target_count=settings.target_count,
    )


__all__ = [
    "ChatCompletionsAdapter",
    "groq_adapter",
    "deepseek_adapter",
]
