"""
Text chat endpoint and per-session history.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from yako.models.schemas import ChatRequest, ChatResponse, ErrorResponse, HistoryResponse
from yako.services.chat_service import ChatOrchestrator

router = APIRouter(prefix="/api", tags=["chat"])


def get_chat_service(request: Request) -> ChatOrchestrator:
    return request.app.state.chat_service


def get_session_id(request: Request) -> Optional[str]:
    header = request.app.state.settings.SESSION_HEADER
    return request.headers.get(header)


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    req: Optional[ChatRequest] = None,
    session_id: Optional[str] = Depends(get_session_id),
    service: ChatOrchestrator = Depends(get_chat_service),
):
    reply = await service.handle(req.message if req else None, session_id)
    return ChatResponse(response=reply)


@router.get("/history", response_model=HistoryResponse)
async def history(
    session_id: Optional[str] = Depends(get_session_id),
    service: ChatOrchestrator = Depends(get_chat_service),
):
    return HistoryResponse(history=service.history(session_id))
