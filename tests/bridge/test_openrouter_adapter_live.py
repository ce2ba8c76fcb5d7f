import asyncio
import os
import pytest

from vela_llm_bridge.adapters.openrouter import OpenRouterAdapter
from vela_llm_bridge.core.config import ProviderSecrets
from vela_llm_bridge.models import ChatRequest


@pytest.mark.live
def test_openrouter_adapter_chat_smoke():
    """Live smoke test; requires OPENROUTER_API_KEY."""
    if not os.getenv("OPENROUTER_API_KEY"):
        pytest.skip("OPENROUTER_API_KEY not set; skipping live OpenRouter test")

    req = ChatRequest(provider="openrouter", system="Reply with one word.", prompt="Say OK.")
    resp = asyncio.run(OpenRouterAdapter().chat(req, ProviderSecrets.from_env(), origin="http://localhost"))

    assert isinstance(resp.text, str)
    assert resp.raw.get("choices")
