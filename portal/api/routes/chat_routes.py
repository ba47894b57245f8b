"""
Chat Routes

GET /chat/sessions - My chat sessions, newest first
POST /chat/sessions - Start a session
GET /chat/sessions/{session_id}/messages - Messages, oldest first
POST /chat/sessions/{session_id}/messages - Send a message (reply arrives later)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from portal.api.deps import get_chat_service
from portal.core.auth import get_current_user, get_optional_user
from portal.services.chat_service import ChatService
from portal.schemas.schemas import (
    ChatSessionCreate, ChatSessionResponse, ChatMessageCreate, ChatMessageResponse
)

router = APIRouter(prefix="/chat", tags=["AI Assistant"])


@router.get("/sessions", response_model=List[ChatSessionResponse])
async def list_sessions(
    user: Optional[dict] = Depends(get_optional_user),
    chat: ChatService = Depends(get_chat_service)
):
    if not user:
        return []
    return chat.list_sessions(user["user_id"])


@router.post("/sessions", response_model=ChatSessionResponse, status_code=201)
async def create_session(
    data: ChatSessionCreate,
    user: dict = Depends(get_current_user),
    chat: ChatService = Depends(get_chat_service)
):
    return chat.create_session(user["user_id"], data.title)


@router.get("/sessions/{session_id}/messages", response_model=List[ChatMessageResponse])
async def list_messages(
    session_id: int,
    user: dict = Depends(get_current_user),
    chat: ChatService = Depends(get_chat_service)
):
    """Full history of a session, oldest first."""
    chat.get_session(session_id, user["user_id"])
    return chat.list_messages(session_id)


@router.post("/sessions/{session_id}/messages", response_model=ChatMessageResponse, status_code=202)
async def send_message(
    session_id: int,
    data: ChatMessageCreate,
    user: dict = Depends(get_current_user),
    chat: ChatService = Depends(get_chat_service)
):
    """
    Store the message and queue the assistant reply.

    The reply is not in this response; re-read the messages to see it.
    """
    return chat.send_message(user["user_id"], session_id, data.content)
