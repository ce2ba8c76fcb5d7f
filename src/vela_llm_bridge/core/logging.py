# src/vela_llm_bridge/core/logging.py
from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Optional

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# httpx/httpcore log the full request URL at INFO/DEBUG, and the Gemini
# key travels in that URL as ?key=...
TRANSPORT_LOGGERS = ("httpx", "httpcore")

_SECRET_QUERY = re.compile(r"([?&]key=)[^&\s\"']+")
_SECRET_BEARER = re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+")


def redact(text: str) -> str:
    """Mask `key=` query values and Bearer tokens in a log line."""
    text = _SECRET_QUERY.sub(r"\1***", text)
    return _SECRET_BEARER.sub(r"\1***", text)


class RedactSecretsFilter(logging.Filter):
    """Handler-side safety net in case a third-party logger is turned back up."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        clean = redact(msg)
        if clean != msg:
            record.msg, record.args = clean, None
        return True


def _env_level(default: str = "INFO") -> int:
    name = (os.getenv("LOG_LEVEL") or default).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def quiet_transport_loggers() -> None:
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging() -> None:
    """
    Configure root logging for the bridge. Idempotent.
    LOG_LEVEL controls verbosity (default INFO); transport loggers are
    always held at WARNING so upstream URLs never reach the logs.
    """
    root = logging.getLogger()
    root.setLevel(_env_level())
    quiet_transport_loggers()

    if any(getattr(h, "_vela_bridge", False) for h in root.handlers):
        return
    if root.handlers:
        # already configured (pytest, uvicorn, etc.): just guard their handlers
        for h in root.handlers:
            if not any(isinstance(f, RedactSecretsFilter) for f in h.filters):
                h.addFilter(RedactSecretsFilter())
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    handler.addFilter(RedactSecretsFilter())
    handler._vela_bridge = True  # type: ignore[attr-defined]
    root.addHandler(handler)


# --- Opt-in upstream tracing ----------------------------------------------------

_trace_log = logging.getLogger("vela_llm_bridge.trace")


def trace_enabled() -> bool:
    return (os.getenv("BRIDGE_TRACE", "")).lower() in ("1", "true", "yes", "on")


def bridge_trace(
    event: str,
    *,
    provider: str,
    model: str,
    status: Optional[int] = None,
    ms: Optional[int] = None,
    **extra: Any,
) -> None:
    """
    One line per upstream call, only when BRIDGE_TRACE=true:
      [bridge] upstream.done provider=google model=gemini-2.5-flash-lite status=200 ms=412 ts=...
    Only identifiers and timings go here, never payloads or keys.
    """
    if not trace_enabled():
        return
    fields = {"provider": provider, "model": model}
    if status is not None:
        fields["status"] = status
        fields["ok"] = 200 <= status < 300
    if ms is not None:
        fields["ms"] = ms
    fields.update(extra)
    fields["ts"] = int(time.time())
    line = " ".join(f"{k}={v}" for k, v in fields.items())
    _trace_log.info("[bridge] %s %s", event, redact(line))
