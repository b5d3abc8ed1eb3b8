from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env lives at the project root: hermetrix/core/config.py -> hermetrix/core -> hermetrix -> root
_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _ROOT / ".env"

OPENAI_KEY_PREFIX = "sk-"


class Settings(BaseSettings):
    openai_api_key: str = ""
    # Comma separated. When set, keys are tried in order; a key failing auth or rate limit hands over to the next.
    openai_api_keys: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 60.0
    database_url: str = "sqlite:///./hermetrix.db"
    # Comma separated origin list; "*" allows all
    cors_origins: str = "*"
    # Per-IP limit on upload, assessment and chat endpoints
    rate_limit_per_minute: int = 60
    upload_rate_limit_per_minute: int = 10
    rate_limit_enabled: bool = True
    upload_max_mb: int = 10
    upload_dir: str = str(_ROOT / "data" / "uploads")
    # X-Session-ID fallback when the client sends none
    default_session_id: str = "default"
    # Re-run extraction jobs left pending/processing by a previous process
    resume_jobs_on_startup: bool = True
    # Messages of earlier conversation sent to the model with each chat turn
    chat_history_limit: int = 20
    environment: str = "development"
    log_level: str = "INFO"

    model_config = {
        "env_file": _ENV_FILE if _ENV_FILE.is_file() else ".env",
        "extra": "ignore",
    }

    @field_validator("openai_api_key", "openai_api_keys", mode="before")
    @classmethod
    def strip_keys(cls, v: str | None) -> str:
        """Trailing whitespace from copy/paste breaks auth."""
        return (v or "").strip()


settings = Settings()


def get_openai_keys() -> list[str]:
    """
    Usable OpenAI keys (start with sk-, no whitespace).
    OPENAI_API_KEYS wins when present; otherwise OPENAI_API_KEY as a single entry.
    """
    keys_raw = (settings.openai_api_keys or "").strip()
    if keys_raw:
        keys = [k.strip() for k in keys_raw.split(",") if k.strip() and k.strip().startswith(OPENAI_KEY_PREFIX)]
        if keys:
            return keys
    single = (settings.openai_api_key or "").strip()
    if single and single.startswith(OPENAI_KEY_PREFIX):
        return [single]
    return []


def is_openai_configured() -> bool:
    return len(get_openai_keys()) > 0


def upload_max_bytes() -> int:
    return settings.upload_max_mb * 1024 * 1024
