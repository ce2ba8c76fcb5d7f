# src/vela_llm_bridge/adapters/base.py
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from vela_llm_bridge.core.config import ProviderSecrets, get_provider_cfg
from vela_llm_bridge.core.errors import MissingCredential, UpstreamError
from vela_llm_bridge.core.logging import bridge_trace
from vela_llm_bridge.models import ChatRequest, ChatResponse


def dig(data: Any, *path: Any, default: Any = None) -> Any:
    """
    Walk nested dicts/lists without raising.
    dig(d, "choices", 0, "message", "content") -> value or default.
    """
    cur = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(cur, list) or not -len(cur) <= key < len(cur):
                return default
        elif not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return default if cur is None else cur


def as_text(value: Any) -> str:
    """Coerce a provider content field into a string ("" when absent)."""
    if isinstance(value, str):
        return value
    # some OpenAI-compatible upstreams return content as list-of-parts
    if isinstance(value, list):
        return "".join(
            p["text"] for p in value if isinstance(p, dict) and isinstance(p.get("text"), str)
        )
    return ""


class ChatAdapter(ABC):
    """
    One upstream provider: translate a ChatRequest into its wire payload,
    POST it, and parse the reply back into a ChatResponse.

    cfg is the provider slice of bridge.yml, e.g.:
      {
        "base_url": "https://openrouter.ai/api/v1",
        "model": "openai/gpt-oss-20b:free",
        "api_key_env": "OPENROUTER_API_KEY",
      }
    """

    name: str = ""
    label: str = ""  # used in upstream error messages

    def __init__(
        self,
        cfg: Optional[Dict[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cfg = cfg if cfg is not None else get_provider_cfg(self.name)
        self.transport = transport

    @property
    def api_key_env(self) -> str:
        return self.cfg.get("api_key_env", "")

    def resolve_model(self, req: ChatRequest) -> str:
        return req.model or self.cfg["model"]

    # --- wire format -----------------------------------------------------------

    @abstractmethod
    def build_payload(self, req: ChatRequest) -> Dict[str, Any]:
        """Raise MissingContent when the request has neither messages nor prompt."""

    @abstractmethod
    def endpoint(self, model: str) -> str:
        ...

    def params(self, api_key: str) -> Dict[str, str]:
        return {}

    def headers(
        self, api_key: str, req: ChatRequest, secrets: ProviderSecrets, origin: str
    ) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    @abstractmethod
    def parse_text(self, data: Any) -> str:
        """Extract reply text; must return "" rather than raise on odd shapes."""

    # --- call ------------------------------------------------------------------

    async def chat(
        self, req: ChatRequest, secrets: ProviderSecrets, origin: str = ""
    ) -> ChatResponse:
        payload = self.build_payload(req)

        api_key = secrets.api_key_for(self.name)
        if not api_key:
            raise MissingCredential(self.api_key_env)

        model = self.resolve_model(req)
        t0 = time.time()
        try:
            async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
                r = await client.post(
                    self.endpoint(model),
                    params=self.params(api_key),
                    headers=self.headers(api_key, req, secrets, origin),
                    json=payload,
                )
        except httpx.HTTPError as ex:
            dur = int((time.time() - t0) * 1000)
            bridge_trace("upstream.failed", provider=self.name, model=model, ms=dur, error=type(ex).__name__)
            raise
        dur = int((time.time() - t0) * 1000)
        bridge_trace("upstream.done", provider=self.name, model=model, status=r.status_code, ms=dur)

        if not r.is_success:
            raise UpstreamError(self.label, r.status_code, r.text)

        data = r.json()
        return ChatResponse(text=self.parse_text(data), raw=data)


def message_dicts(req: ChatRequest) -> List[Dict[str, str]]:
    return [{"role": m.role, "content": m.content} for m in (req.messages or [])]
