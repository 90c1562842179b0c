"""
LLM provider client (OpenAI-compatible API, Groq by default) plus the
retrieval-augmented answer path with canned fallbacks.
If no API key is configured every answer comes from the fallback generator.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import httpx
import openai
from loguru import logger

from yako.config import Settings
from yako.errors import ProviderError
from yako.models.schemas import PromptMessage, Turn
from yako.services.fallback_service import FallbackGenerator
from yako.services.knowledge_service import KnowledgeBase


# ── Key validation ────────────────────────────────────────
def _is_real_api_key(key: str) -> bool:
    """Return True only if the key looks like a genuine credential."""
    if not key or not key.strip():
        return False
    # Placeholder keys from .env templates
    if "your" in key.lower():
        return False
    return True


def _error_message(exc: openai.APIStatusError, default: str) -> str:
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return default


class ProviderClient:
    """Thin async wrapper over the provider's chat-completions and models endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        timeout: float = 30.0,
        max_tokens: int = 500,
        temperature: float = 0.7,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client: Optional[openai.AsyncOpenAI] = None
        if _is_real_api_key(api_key):
            self._client = openai.AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout,
                max_retries=0,
                http_client=http_client,
            )

    @classmethod
    def from_settings(cls, settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> "ProviderClient":
        return cls(
            api_key=settings.GROQ_API_KEY,
            base_url=settings.PROVIDER_BASE_URL,
            model=settings.PROVIDER_MODEL,
            timeout=settings.PROVIDER_TIMEOUT,
            max_tokens=settings.MAX_TOKENS,
            temperature=settings.TEMPERATURE,
            http_client=http_client,
        )

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def complete(self, messages: Sequence[PromptMessage]) -> str:
        """Single chat-completion call. Every failure is raised as ProviderError."""
        if self._client is None:
            raise ProviderError("No provider API key configured")

        payload: List[Dict[str, str]] = [m.model_dump() for m in messages]
        logger.debug(f"Provider request: model={self.model} messages={len(payload)}")
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=payload,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.AuthenticationError as e:
            raise ProviderError(
                f"Authentication failed. Please check your API key. Details: {_error_message(e, str(e))}",
                status_code=e.status_code,
            ) from e
        except openai.APIStatusError as e:
            raise ProviderError(f"Provider error ({e.status_code}): {_error_message(e, str(e))}",
                                status_code=e.status_code) from e
        except openai.APIError as e:
            raise ProviderError(f"Provider request failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise ProviderError(f"Invalid response format from provider: {e}") from e
        if not isinstance(content, str) or not content.strip():
            raise ProviderError("Invalid response format from provider: empty content")
        return content.strip()

    async def check_key(self) -> Tuple[bool, str]:
        """Probe the model-listing endpoint with the configured key."""
        if self._client is None:
            return False, "No API key provided"
        try:
            await self._client.models.list()
        except openai.APIStatusError as e:
            return False, _error_message(e, "Invalid API key")
        except Exception as e:
            return False, str(e)
        return True, "API key is valid"


# ─────────────────────────────────────────────────────────
#  PROMPT ASSEMBLY
# ─────────────────────────────────────────────────────────

def build_prompt(
    system_message: str,
    history: Sequence[Turn],
    contexts: Sequence[str] = (),
    window: int = 10,
) -> List[PromptMessage]:
    """System instruction, optional retrieved context, then the trailing history window."""
    messages = [PromptMessage(role="system", content=system_message)]
    if contexts:
        messages.append(PromptMessage(role="system", content="Relevant info: " + "\n".join(contexts)))
    recent = list(history)[-window:] if window > 0 else []
    messages.extend(PromptMessage(role=t.role, content=t.content) for t in recent)
    return messages


class ResponseGenerator:
    """Answers messages no rule matched: provider first, fallback on any failure."""

    def __init__(
        self,
        provider: ProviderClient,
        knowledge: KnowledgeBase,
        fallback: FallbackGenerator,
        system_message: str,
        top_k: int = 1,
        window: int = 10,
    ):
        self.provider = provider
        self.knowledge = knowledge
        self.fallback = fallback
        self.system_message = system_message
        self.top_k = top_k
        self.window = window

    async def answer(self, message: str, history: Sequence[Turn]) -> str:
        """``history`` must already end with the current user turn."""
        if not self.provider.configured:
            logger.info("No provider API key available, using fallback")
            return self.fallback.reply(message)

        try:
            contexts = self.knowledge.retrieve(message, self.top_k)
            if contexts:
                logger.debug(f"RAG context: '{contexts[0][:60]}'")
            prompt = build_prompt(self.system_message, history, contexts, self.window)
            return await self.provider.complete(prompt)
        except ProviderError as e:
            logger.error(f"Provider error: {e}")
        except Exception:
            logger.exception("Unexpected error generating response")

        logger.info("[FALLBACK after error] using canned reply")
        return self.fallback.reply(message)
