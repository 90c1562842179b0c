"""
Canned replies used when the LLM provider is not configured or fails.
"""

import random
from typing import Optional

GREETING_REPLY = "👋 Hello! Nice to meet you. How can I help you today?"
HOWAREYOU_REPLY = "😊 I'm doing well, thank you for asking! How are you doing?"
NAME_REPLY = "🤖 I'm Yako, an AI assistant here to help you. What's your name?"
HELP_REPLY = "🙌 I'm here to help! What would you like assistance with?"
GOODBYE_REPLY = "👋 Goodbye! It was nice chatting with you. Have a great day!"

GENERIC_REPLIES = (
    "🤔 That's interesting! Can you tell me more about that?",
    "👍 I understand. What would you like to know?",
    "💯 That's a good point. How can I help you further?",
    "👀 I see. What else would you like to discuss?",
    "🙏 Thanks for sharing that with me. What's on your mind?",
    "😊 I appreciate you telling me that. How can I assist you?",
    "✅ That makes sense. What would you like to explore next?",
    "👂 I hear you. Is there anything specific I can help with?",
)

KEYWORD_REPLIES = (GREETING_REPLY, HOWAREYOU_REPLY, NAME_REPLY, HELP_REPLY, GOODBYE_REPLY)
ALL_REPLIES = KEYWORD_REPLIES + GENERIC_REPLIES


class FallbackGenerator:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def reply(self, message: str = "") -> str:
        text = (message or "").lower()

        if "hello" in text or "hi" in text:
            return GREETING_REPLY
        if "how are you" in text:
            return HOWAREYOU_REPLY
        if "what" in text and "name" in text:
            return NAME_REPLY
        if "help" in text:
            return HELP_REPLY
        if "bye" in text or "goodbye" in text:
            return GOODBYE_REPLY
        return self.rng.choice(GENERIC_REPLIES)
