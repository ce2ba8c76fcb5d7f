from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml


# --- Load bridge.yml once at import into global CFG --------------------------

# This file lives at: src/vela_llm_bridge/core/config.py
# bridge.yml sits next to app.py: src/vela_llm_bridge/bridge.yml
PACKAGE_DIR = Path(__file__).resolve().parents[1]
CFG_PATH = PACKAGE_DIR / "bridge.yml"

with CFG_PATH.open("r", encoding="utf-8") as f:
    CFG: Dict[str, Any] = yaml.safe_load(f)


CHAT_PATH: str = CFG.get("chat_path", "/api/llm-chat")
DEFAULT_APP_NAME: str = CFG.get("default_app_name", "Vela Japanese Learning App")

_gen = CFG.get("generation", {})
DEFAULT_TEMPERATURE: float = float(_gen.get("temperature", 0.7))
DEFAULT_MAX_TOKENS: int = int(_gen.get("max_tokens", 1024))


def get_provider_cfg(provider: str, cfg: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Return the catalogue slice for one provider, e.g.:
      {
        "base_url": "https://openrouter.ai/api/v1",
        "model": "openai/gpt-oss-20b:free",
        "api_key_env": "OPENROUTER_API_KEY",
      }
    Raises KeyError for providers not in bridge.yml.
    """
    if cfg is None:
        cfg = CFG
    return dict(cfg.get("providers", {})[provider])


# --- Secrets ------------------------------------------------------------------

_UNSET = ("", "undefined", "null")


def _sanitize(value: Optional[str]) -> Optional[str]:
    # deploy tooling sometimes injects the literal strings "undefined"/"null"
    if value is None:
        return None
    value = value.strip()
    if value in _UNSET:
        return None
    return value


@dataclass(frozen=True)
class ProviderSecrets:
    """
    Server-side credentials for the upstream providers.

    Every field is optional: a deployment may configure only one provider.
    A missing key is reported when a request actually selects that provider.
    """

    gemini_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    app_name: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderSecrets":
        env = os.environ if environ is None else environ
        return cls(
            gemini_api_key=_sanitize(env.get("GEMINI_API_KEY")),
            openrouter_api_key=_sanitize(env.get("OPENROUTER_API_KEY")),
            app_name=_sanitize(env.get("APP_NAME")),
        )

    def api_key_for(self, provider: str) -> Optional[str]:
        if provider == "google":
            return self.gemini_api_key
        if provider == "openrouter":
            return self.openrouter_api_key
        return None
