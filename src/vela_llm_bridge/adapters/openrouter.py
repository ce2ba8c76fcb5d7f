# src/vela_llm_bridge/adapters/openrouter.py
from __future__ import annotations

from typing import Any, Dict, List

from vela_llm_bridge.adapters.base import ChatAdapter, as_text, dig, message_dicts
from vela_llm_bridge.core.config import (
    DEFAULT_APP_NAME,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    ProviderSecrets,
)
from vela_llm_bridge.core.errors import MissingContent
from vela_llm_bridge.models import ChatRequest


class OpenRouterAdapter(ChatAdapter):
    """
    OpenRouter adapter (OpenAI-compatible /chat/completions).
    """

    name = "openrouter"
    label = "OpenRouter"

    def build_payload(self, req: ChatRequest) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = []
        if req.system:
            messages.append({"role": "system", "content": req.system})

        if req.messages:
            messages.extend(message_dicts(req))
        elif req.prompt:
            messages.append({"role": "user", "content": req.prompt})
        else:
            raise MissingContent()

        return {
            "model": self.resolve_model(req),
            "messages": messages,
            "temperature": req.temperature if req.temperature is not None else DEFAULT_TEMPERATURE,
            "max_tokens": req.max_tokens if req.max_tokens is not None else DEFAULT_MAX_TOKENS,
        }

    def endpoint(self, model: str) -> str:
        return self.cfg["base_url"].rstrip("/") + "/chat/completions"

    def headers(
        self, api_key: str, req: ChatRequest, secrets: ProviderSecrets, origin: str
    ) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": req.referer or origin,
            "X-Title": req.app_name or secrets.app_name or DEFAULT_APP_NAME,
        }

    def parse_text(self, data: Any) -> str:
        return as_text(dig(data, "choices", 0, "message", "content"))
