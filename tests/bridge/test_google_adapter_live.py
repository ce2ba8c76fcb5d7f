import asyncio
import os
import pytest

from vela_llm_bridge.adapters.google import GoogleAdapter
from vela_llm_bridge.core.config import ProviderSecrets
from vela_llm_bridge.models import ChatRequest


@pytest.mark.live
def test_google_adapter_chat_smoke():
    """
    Live smoke test against the Gemini API.

    Requires GEMINI_API_KEY in env (or .env loaded by conftest).
    """
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip("GEMINI_API_KEY not set; skipping live Gemini test")

    req = ChatRequest(provider="google", prompt="Say 'OK' in one short sentence.", max_tokens=32)
    resp = asyncio.run(GoogleAdapter().chat(req, ProviderSecrets.from_env()))

    assert isinstance(resp.text, str)
    assert "ok" in resp.text.lower()
    assert resp.raw.get("candidates")
