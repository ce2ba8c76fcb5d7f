# src/vela_llm_bridge/adapters/google.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from vela_llm_bridge.adapters.base import ChatAdapter, as_text, dig
from vela_llm_bridge.core.config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from vela_llm_bridge.core.errors import MissingContent
from vela_llm_bridge.models import ChatRequest


def _part(text: str) -> List[Dict[str, str]]:
    return [{"text": text}]


class GoogleAdapter(ChatAdapter):
    """
    Google Generative Language API (Gemini) adapter.

    Wire shape:
      {
        "contents": [{"role": "user"|"model", "parts": [{"text": ...}]}, ...],
        "systemInstruction": {"role": "system", "parts": [{"text": ...}]},
        "generationConfig": {"temperature": ..., "maxOutputTokens": ...}
      }
    The API key travels as the `key` query parameter.
    """

    name = "google"
    label = "Google"

    def resolve_model(self, req: ChatRequest) -> str:
        # Normalize model name in case it came as "models/gemini-2.5-flash"
        model = super().resolve_model(req)
        if model.startswith("models/"):
            model = model.split("/", 1)[1]
        return model

    def build_payload(self, req: ChatRequest) -> Dict[str, Any]:
        contents: List[Dict[str, Any]] = []
        system_text: Optional[str] = None

        if req.messages:
            for m in req.messages:
                if m.role == "system":
                    # last system-role message wins
                    system_text = m.content
                else:
                    contents.append({
                        "role": "model" if m.role == "assistant" else "user",
                        "parts": _part(m.content),
                    })
        elif req.prompt:
            contents.append({"role": "user", "parts": _part(req.prompt)})
        else:
            raise MissingContent()

        payload: Dict[str, Any] = {
            "contents": contents,
            "generationConfig": {
                "temperature": req.temperature if req.temperature is not None else DEFAULT_TEMPERATURE,
                "maxOutputTokens": req.max_tokens if req.max_tokens is not None else DEFAULT_MAX_TOKENS,
            },
        }

        # explicit top-level system beats anything found in messages
        if req.system:
            system_text = req.system
        if system_text is not None:
            payload["systemInstruction"] = {"role": "system", "parts": _part(system_text)}

        return payload

    def endpoint(self, model: str) -> str:
        return f"{self.cfg['base_url'].rstrip('/')}/models/{model}:generateContent"

    def params(self, api_key: str) -> Dict[str, str]:
        return {"key": api_key}

    def parse_text(self, data: Any) -> str:
        return as_text(dig(data, "candidates", 0, "content", "parts", 0, "text"))
