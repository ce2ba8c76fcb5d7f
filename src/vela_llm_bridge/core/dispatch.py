# src/vela_llm_bridge/core/dispatch.py
from __future__ import annotations

import json
import logging
from typing import Dict, Optional, Type

import httpx
from pydantic import ValidationError

from vela_llm_bridge.adapters.base import ChatAdapter
from vela_llm_bridge.adapters.google import GoogleAdapter
from vela_llm_bridge.adapters.openrouter import OpenRouterAdapter
from vela_llm_bridge.core.config import ProviderSecrets
from vela_llm_bridge.core.errors import (
    BridgeError,
    InternalError,
    InvalidBody,
    InvalidRequest,
    MissingProvider,
    UnsupportedProvider,
)
from vela_llm_bridge.models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[ChatAdapter]] = {
    GoogleAdapter.name: GoogleAdapter,
    OpenRouterAdapter.name: OpenRouterAdapter,
}


def _format_validation(ex: ValidationError) -> str:
    parts = []
    for err in ex.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def parse_chat_request(raw: bytes | str) -> ChatRequest:
    """
    Parse the inbound body into a ChatRequest.

    Order matters:
      1) JSON parse            -> InvalidBody
      2) provider presence     -> MissingProvider
      3) field constraints     -> InvalidRequest
    Whether the provider is actually supported is left to the Dispatcher.
    """
    try:
        data = json.loads(raw)
    except ValueError as ex:
        raise InvalidBody(str(ex)) from ex

    provider = data.get("provider") if isinstance(data, dict) else None
    if not provider:
        raise MissingProvider()
    if not isinstance(provider, str):
        raise UnsupportedProvider()

    try:
        return ChatRequest.model_validate(data)
    except ValidationError as ex:
        raise InvalidRequest(_format_validation(ex)) from ex


class Dispatcher:
    """
    Route a ChatRequest to exactly one adapter and normalize the outcome.

    Returns a ChatResponse or raises a BridgeError. Anything unexpected
    (transport failure, malformed upstream JSON, ...) becomes InternalError.
    """

    def __init__(
        self,
        secrets: ProviderSecrets,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        adapters: Optional[Dict[str, ChatAdapter]] = None,
    ):
        self.secrets = secrets
        if adapters is None:
            adapters = {name: cls(transport=transport) for name, cls in ADAPTERS.items()}
        self.adapters = adapters

    async def dispatch(self, req: ChatRequest, origin: str = "") -> ChatResponse:
        adapter = self.adapters.get(req.provider)
        if adapter is None:
            raise UnsupportedProvider()

        try:
            return await adapter.chat(req, self.secrets, origin=origin)
        except BridgeError as ex:
            logger.info("provider=%s failed status=%s", req.provider, ex.status_code)
            raise
        except Exception as ex:
            logger.exception("Unexpected failure calling provider %s", req.provider)
            raise InternalError(ex) from ex
