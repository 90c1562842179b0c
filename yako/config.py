"""
Application configuration — reads all settings from environment variables.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent

DEFAULT_SYSTEM_MESSAGE = (
    "You are Yako, a helpful and friendly AI assistant powered by Groq's Llama 3 model. "
    "Use appropriate emojis in your responses to make them more engaging and expressive. "
    "For example, use 👋 for greetings, 🤔 for thinking, 💡 for ideas, ✅ for confirmations, etc."
)


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "Yako Chat Relay"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3002
    CORS_ORIGINS: str = "*"

    # ── LLM provider (OpenAI-compatible) ─────────────────
    GROQ_API_KEY: str = ""
    PROVIDER_BASE_URL: str = "https://api.groq.com/openai/v1"
    PROVIDER_MODEL: str = "llama-3.3-70b-versatile"
    PROVIDER_TIMEOUT: float = 30.0
    MAX_TOKENS: int = 500
    TEMPERATURE: float = 0.7
    SYSTEM_MESSAGE: str = DEFAULT_SYSTEM_MESSAGE

    # ── Knowledge base (RAG) ─────────────────────────────
    KNOWLEDGE_BASE_PATH: str = str(PACKAGE_DIR / "data" / "knowledge_base.json")
    RAG_TOP_K: int = 1

    # ── Sessions ─────────────────────────────────────────
    SESSION_HEADER: str = "x-session-id"
    DEFAULT_SESSION_ID: str = "default"
    HISTORY_LIMIT: int = 20
    PROMPT_WINDOW: int = 10

    # ── Static UI ────────────────────────────────────────
    STATIC_DIR: str = str(PACKAGE_DIR / "static")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
