# src/vela_llm_bridge/models.py
from __future__ import annotations
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]

class ChatMessage(BaseModel):
    role: Role
    content: str

class ChatRequest(BaseModel):
    """
    Normalized chat request accepted by the bridge.

    `provider` stays a plain string: deciding whether it is supported is
    the dispatcher's job, not the schema's.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    provider: str
    model: Optional[str] = None
    messages: Optional[List[ChatMessage]] = None
    prompt: Optional[str] = None
    system: Optional[str] = None
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, gt=0, alias="maxTokens")
    app_name: Optional[str] = Field(None, alias="appName")  # OpenRouter X-Title
    referer: Optional[str] = None                          # OpenRouter HTTP-Referer

class ChatResponse(BaseModel):
    text: str = ""
    raw: Any = None

class ErrorEnvelope(BaseModel):
    error: str
