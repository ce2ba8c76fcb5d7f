from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
import httpx

# Load .env from project root before anything reads secrets
ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(ROOT_DIR / ".env")

from vela_llm_bridge.core.logging import setup_logging  # noqa: E402
setup_logging()

from vela_llm_bridge.core.config import CFG, CHAT_PATH, ProviderSecrets  # noqa: E402
from vela_llm_bridge.core.cors import install_cors_gate  # noqa: E402
from vela_llm_bridge.core.dispatch import ADAPTERS, Dispatcher, parse_chat_request  # noqa: E402
from vela_llm_bridge.core.errors import BridgeError  # noqa: E402

app = FastAPI(title="Vela LLM Bridge", version="0.1")

install_cors_gate(app, CHAT_PATH)


@app.exception_handler(BridgeError)
async def bridge_error_handler(request: Request, exc: BridgeError) -> JSONResponse:
    return JSONResponse(exc.to_envelope(), status_code=exc.status_code)


# --- Dependencies (overridden in tests) -------------------------------------

def get_secrets() -> ProviderSecrets:
    # read on every request; never cached
    return ProviderSecrets.from_env()


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    return None


def get_dispatcher(
    secrets: ProviderSecrets = Depends(get_secrets),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
) -> Dispatcher:
    return Dispatcher(secrets, transport=transport)


def request_origin(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


# --- Routes -------------------------------------------------------------------

@app.get("/healthz")
def health():
    return {"status": "ok"}


@app.get("/v1/providers")
def list_providers(secrets: ProviderSecrets = Depends(get_secrets)) -> Dict[str, Any]:
    """
    Provider catalogue plus whether this deployment has the matching secret.
    Secret values are never returned.
    """
    providers = CFG.get("providers", {})
    return {
        "providers": {
            name: {
                "model": providers.get(name, {}).get("model"),
                "configured": bool(secrets.api_key_for(name)),
            }
            for name in ADAPTERS
        }
    }


@app.post(CHAT_PATH)
async def llm_chat(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    # 1) Parse + validate (raw body so we own the error messages)
    raw = await request.body()
    req = parse_chat_request(raw)

    # 2) Dispatch to exactly one provider
    result = await dispatcher.dispatch(req, origin=request_origin(request))

    return JSONResponse(result.model_dump())
