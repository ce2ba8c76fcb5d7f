# src/vela_llm_bridge/core/errors.py
from __future__ import annotations


class BridgeError(Exception):
    """
    Base for every failure the bridge reports to callers.

    The HTTP status carries the class of failure; `message` becomes the
    `error` field of the JSON envelope.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_envelope(self) -> dict:
        return {"error": self.message}


# --- Caller errors (400) -------------------------------------------------------

class InvalidBody(BridgeError):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(f"Invalid JSON: {detail}")


class InvalidRequest(BridgeError):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(f"Invalid request: {detail}")


class MissingProvider(BridgeError):
    status_code = 400

    def __init__(self):
        super().__init__("Missing provider")


class UnsupportedProvider(BridgeError):
    status_code = 400

    def __init__(self):
        super().__init__("Unsupported provider")


class MissingContent(BridgeError):
    status_code = 400

    def __init__(self):
        super().__init__("Missing prompt or messages")


# --- Server-side errors ----------------------------------------------------------

class MissingCredential(BridgeError):
    """Deployment misconfiguration: the selected provider has no server secret."""

    status_code = 500

    def __init__(self, env_name: str):
        super().__init__(f"Missing {env_name} server secret")
        self.env_name = env_name


class UpstreamError(BridgeError):
    """Non-2xx from the provider; status mirrors the upstream one."""

    def __init__(self, label: str, status_code: int, body: str):
        super().__init__(f"{label} error {status_code}: {body}", status_code=status_code)
        self.body = body


class InternalError(BridgeError):
    status_code = 500

    def __init__(self, exc: BaseException):
        super().__init__(str(exc) or exc.__class__.__name__)
