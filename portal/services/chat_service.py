"""
Chat Service - the AI study assistant.

send_message():
1. Store the user's message and update the session preview (synchronous)
2. Enqueue generate_reply() on the task queue and return

generate_reply() (runs later, on a worker):
1. Read the 10 most recent messages, oldest first
2. Ask the completion provider for a reply
3. Store the reply (or a fixed apology on any failure) as an assistant message

The reply job is only enqueued after the user message is committed, so the
assistant message is always stored after the message it answers.
"""

import time
import logging
from typing import List, Optional

from portal.core.config import get_settings
from portal.core.errors import NotFoundError
from portal.db.store import Store
from portal.services.completion_client import CompletionClient
from portal.services.task_queue import TaskQueue

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful VTU (Visvesvaraya Technological University) academic assistant.
Help students with:
- Academic queries about VTU curriculum, syllabus, and exam patterns
- Study guidance and preparation strategies
- Career advice and placement preparation
- University procedures and regulations
- Technical concepts and problem-solving

Keep responses concise, helpful, and focused on VTU academic context."""

FALLBACK_REPLY = "I'm sorry, I'm having trouble responding right now. Please try again later."


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatService:

    def __init__(
        self,
        store: Store,
        task_queue: TaskQueue,
        completion_client: CompletionClient,
        context_size: int = None
    ):
        self.store = store
        self.task_queue = task_queue
        self.completion_client = completion_client
        self.context_size = context_size or get_settings().chat_context_size

    # ---- sessions ----

    def list_sessions(self, user_id: int) -> List[dict]:
        return self.store.query("chat_sessions.by_user", user_id, descending=True)

    def create_session(self, user_id: int, title: str) -> dict:
        return self.store.insert("chat_sessions", {"user_id": user_id, "title": title})

    def get_session(self, session_id: int, user_id: Optional[int] = None) -> dict:
        session = self.store.get("chat_sessions", session_id)
        if not session or (user_id is not None and session["user_id"] != user_id):
            raise NotFoundError("Chat session not found")
        return session

    # ---- messages ----

    # Insertion order (message_id), not timestamp: the wall clock can step back.

    def list_messages(self, session_id: int) -> List[dict]:
        return self.store.query("chat_messages.by_session", session_id)

    def recent_messages(self, session_id: int) -> List[dict]:
        """The last `context_size` messages, oldest first."""
        newest_first = self.store.query(
            "chat_messages.by_session", session_id,
            descending=True, limit=self.context_size
        )
        return list(reversed(newest_first))

    def _append(self, session: dict, role: str, content: str) -> dict:
        message = self.store.insert("chat_messages", {
            "session_id": session["session_id"],
            "user_id": session["user_id"],
            "content": content,
            "role": role,
            "timestamp": _now_ms()
        })
        self.store.patch("chat_sessions", session["session_id"], {"last_message": content})
        return message

    def send_message(self, user_id: int, session_id: int, content: str) -> dict:
        """Store the user message and schedule the assistant reply."""
        session = self.get_session(session_id, user_id)
        message = self._append(session, "user", content)
        self.task_queue.enqueue(self.generate_reply, session_id)
        return message

    def generate_reply(self, session_id: int) -> dict:
        history = [
            {"role": m["role"], "content": m["content"]}
            for m in self.recent_messages(session_id)
        ]

        try:
            reply = self.completion_client.complete(SYSTEM_PROMPT, history)
        except Exception as e:
            logger.error("AI response error for session %s: %s", session_id, e)
            reply = FALLBACK_REPLY

        session = self.get_session(session_id)
        return self._append(session, "assistant", reply)
