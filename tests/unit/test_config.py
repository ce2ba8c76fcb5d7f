# tests/unit/test_config.py
from vela_llm_bridge.core.config import CFG, ProviderSecrets, get_provider_cfg

def test_secrets_read_from_mapping():
    s = ProviderSecrets.from_env({"GEMINI_API_KEY": "g", "OPENROUTER_API_KEY": "o", "APP_NAME": "Vela"})
    assert s.api_key_for("google") == "g"
    assert s.api_key_for("openrouter") == "o"
    assert s.app_name == "Vela"

def test_blank_and_placeholder_values_count_as_unset():
    s = ProviderSecrets.from_env({"GEMINI_API_KEY": "  ", "OPENROUTER_API_KEY": "undefined", "APP_NAME": "null"})
    assert s == ProviderSecrets()

def test_secrets_reread_on_every_call(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert ProviderSecrets.from_env().gemini_api_key is None
    monkeypatch.setenv("GEMINI_API_KEY", "later")
    assert ProviderSecrets.from_env().gemini_api_key == "later"

def test_unknown_provider_has_no_key():
    assert ProviderSecrets(gemini_api_key="g").api_key_for("x") is None

def test_catalogue_defaults():
    assert get_provider_cfg("google")["model"] == "gemini-2.5-flash-lite"
    assert get_provider_cfg("openrouter")["model"] == "openai/gpt-oss-20b:free"
    assert CFG["chat_path"] == "/api/llm-chat"

def test_get_provider_cfg_returns_copy():
    cfg = get_provider_cfg("google")
    cfg["model"] = "mutated"
    assert get_provider_cfg("google")["model"] == "gemini-2.5-flash-lite"
