"""
Pydantic request / response schemas for the API.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Domain ───────────────────────────────────────────────
class KnowledgeEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class PromptMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


# ── Chat ─────────────────────────────────────────────────
class ChatRequest(BaseModel):
    message: Optional[str] = None


class ChatResponse(BaseModel):
    response: str


class HistoryResponse(BaseModel):
    history: List[Turn] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


# ── Provider / health ────────────────────────────────────
class ProviderKeyStatus(BaseModel):
    valid: bool
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str
