# src/vela_llm_bridge/core/cors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from vela_llm_bridge.core.errors import InternalError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST,OPTIONS",
}

ALLOWED_METHODS = ("POST", "OPTIONS")


def with_cors(response: Response) -> Response:
    response.headers.update(CORS_HEADERS)
    return response


def install_cors_gate(app: FastAPI, chat_path: str) -> None:
    """
    Single boundary for CORS + method gating.

    - chat_path + OPTIONS  -> 200 "ok", nothing else runs
    - chat_path + not POST -> 405 {"error": "Method not allowed"}
    - every response leaving the app gets CORS_HEADERS
    - anything that escapes the handlers becomes a JSON 500
    """

    @app.middleware("http")
    async def cors_gate(request: Request, call_next):
        if request.url.path == chat_path:
            if request.method == "OPTIONS":
                return with_cors(PlainTextResponse("ok"))
            if request.method not in ALLOWED_METHODS:
                return with_cors(JSONResponse({"error": "Method not allowed"}, status_code=405))

        try:
            response = await call_next(request)
        except Exception as ex:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            err = InternalError(ex)
            response = JSONResponse(err.to_envelope(), status_code=err.status_code)
        return with_cors(response)
