from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    strict_header_lines: bool = True
    retry_after_lowercase_fallback: bool = False
    registry_lock_timeout: float = 5.0
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "RATE_LIMITS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("registry_lock_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("registry_lock_timeout must be greater than zero")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return value


settings = Settings()
