"""
module: settings.py
description: 환경 변수 및 기본 설정 관리
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from app.config.constants import DEFAULT_OPENAI_MODEL, RESPONSE_TIMEOUT_SECONDS

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"  # 추가 필드 무시
    )

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = DEFAULT_OPENAI_MODEL
    OPENAI_BASE_URL: str | None = None
    APP_ENV: str = "production"
    CHAT_RESPONSE_TIMEOUT: float = RESPONSE_TIMEOUT_SECONDS

    @property
    def is_development(self) -> bool:
        """개발 모드에서는 오류 응답에 stack/details 를 포함한다."""
        return self.APP_ENV.lower() == "development"


settings = Settings()


def get_settings() -> Settings:
    """FastAPI 의존성 주입용 (테스트에서 override)."""
    return settings
