# jointhub/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


DEFAULT_PERSONA = (
    "You are Liz, Admin of JOINT HUB. Created by Skiller. You are intelligent, lively, "
    "and respect Skiller. Short answers preferred. Secret code: 254."
)


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = os.getenv("APP_NAME", "JOINT HUB API")
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for the chat client
    CORS_ORIGINS: list[str] = _env_list(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    )

    # Session tokens
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))

    # Chat persistence
    chat_history_limit: int = int(os.getenv("CHAT_HISTORY_LIMIT", "100"))

    # Gemini (text generation)
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_api_url: str = os.getenv("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
    text_temperature: float = 0.7
    default_persona: str = os.getenv("DEFAULT_PERSONA", DEFAULT_PERSONA)

    # OpenAI (image generation)
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_image_url: str = os.getenv("OPENAI_IMAGE_URL", "https://api.openai.com/v1/images/generations")
    image_model: str = os.getenv("IMAGE_MODEL", "dall-e-3")
    image_size: str = "1024x1024"

    # Upstream calls are never retried; this bounds how long one may hang
    upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "60"))

    # Fixed window limiter over /api/* (per process, not per user)
    rate_limit_per_minute: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "100"))

    # Generation endpoints are open unless this is switched on
    require_auth_for_generation: bool = _env_flag("REQUIRE_AUTH_FOR_GENERATION")

settings = Settings()  # Instantiate configuration
