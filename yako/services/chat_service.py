"""
Per-request chat pipeline: validate, rules, provider / fallback, record history.
"""

from typing import List, Optional

from loguru import logger

from yako.errors import InternalError, InvalidInput
from yako.models.schemas import Turn
from yako.services.ai_service import ResponseGenerator
from yako.services.rule_engine import RuleEngine
from yako.services.session_store import SessionStore


class ChatOrchestrator:
    def __init__(
        self,
        sessions: SessionStore,
        rules: RuleEngine,
        responder: ResponseGenerator,
        default_session_id: str = "default",
    ):
        self.sessions = sessions
        self.rules = rules
        self.responder = responder
        self.default_session_id = default_session_id

    def resolve_session(self, session_id: Optional[str]) -> str:
        return session_id or self.default_session_id

    async def handle(self, message: Optional[str], session_id: Optional[str] = None) -> str:
        if not message or not message.strip():
            raise InvalidInput("Message is required")

        sid = self.resolve_session(session_id)
        logger.info(f"Received message [{sid[:8]}]: '{message[:50]}'")

        try:
            user_turn = Turn(role="user", content=message)
            history = self.sessions.get(sid) + [user_turn]

            reply = self.rules.try_rules(message)
            if reply is None:
                reply = await self.responder.answer(message, history)

            self.sessions.append(sid, user_turn, Turn(role="assistant", content=reply))
        except Exception as e:
            logger.exception(f"Chat error [{sid[:8]}]")
            raise InternalError(str(e)) from e

        logger.info(f"Bot response [{sid[:8]}]: '{reply[:60]}'")
        return reply

    def history(self, session_id: Optional[str] = None) -> List[Turn]:
        return self.sessions.get(self.resolve_session(session_id))
