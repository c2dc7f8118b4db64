"""
AI Gateway Client

Talks to an OpenAI-compatible chat completions API. The gateway is built once
per process (see `careercoach.main.create_app`) and handed to request
handlers through `app.state`, so tests can swap in a fake provider.

Failure policy: one attempt, fixed timeout, no retries. Every provider-side
problem surfaces as `UpstreamUnavailable`; the coach service owns the fallback.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from fastapi import Request
from openai import OpenAI, OpenAIError

from careercoach.config import Settings
from careercoach.errors import UpstreamUnavailable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoachContext:
    """Structured context sent alongside the task prompt."""

    system_prompt: str
    mode: str = "general"
    history: list[dict[str, str]] = field(default_factory=list)
    profile: dict[str, Any] | None = None
    expect_json: bool = False
    temperature: float | None = None


class AIGateway(ABC):
    name = "abstract"

    @abstractmethod
    def complete(self, prompt: str, context: CoachContext) -> str:
        """Return the provider's text completion or raise `UpstreamUnavailable`."""

    @property
    def configured(self) -> bool:
        return True


class UnconfiguredGateway(AIGateway):
    """Used when no API key is set: every call goes straight to the fallback path."""

    name = "unconfigured"

    def complete(self, prompt: str, context: CoachContext) -> str:
        raise UpstreamUnavailable("AI provider is not configured", provider=self.name)

    @property
    def configured(self) -> bool:
        return False


class OpenAIGateway(AIGateway):
    name = "openai"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 20.0,
        max_tokens: int = 1500,
        temperature: float = 0.7,
        client: OpenAI | None = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client = client or OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )

    def build_messages(self, prompt: str, context: CoachContext) -> list[dict[str, str]]:
        messages: list[dict[str, str]] = [{"role": "system", "content": context.system_prompt}]
        for turn in context.history:
            role = turn.get("role")
            content = turn.get("content")
            if role in {"user", "assistant"} and content:
                messages.append({"role": role, "content": content})
        messages.append({"role": "user", "content": prompt})
        return messages

    def complete(self, prompt: str, context: CoachContext) -> str:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": self.build_messages(prompt, context),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature if context.temperature is None else context.temperature,
        }
        if context.expect_json:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(**kwargs)
        except OpenAIError as exc:
            logger.warning("ai.gateway error mode=%s type=%s", context.mode, type(exc).__name__)
            raise UpstreamUnavailable(f"{type(exc).__name__}: {exc}", provider=self.name) from exc

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise UpstreamUnavailable("Provider response contained no choices", provider=self.name)
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise UpstreamUnavailable("Provider response contained no message content", provider=self.name)
        return content


def build_ai_gateway(settings: Settings) -> AIGateway:
    if not settings.ai_enabled:
        logger.info("ai.gateway OPENAI_API_KEY not set; coach will use fallbacks only")
        return UnconfiguredGateway()
    return OpenAIGateway(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout_seconds=settings.ai_timeout_seconds,
        max_tokens=settings.ai_max_tokens,
        temperature=settings.ai_temperature,
    )


def get_ai_gateway(request: Request) -> AIGateway:
    gateway = getattr(request.app.state, "ai_gateway", None)
    if gateway is None:
        return UnconfiguredGateway()
    return gateway
