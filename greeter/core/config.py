from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    # GREETER_ 접두사 환경변수로만 덮어쓸 수 있음 (없으면 기본값 그대로)
    model_config = SettingsConfigDict(env_prefix="GREETER_")

    PROJECT_NAME: str = "greeter"

    # 리스너 설정
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=3000, ge=0, le=65535)

    # 로그 설정 - LOG_FILE 이 비어 있으면 stdout 만 사용
    LOG_LEVEL: LogLevel = "INFO"
    LOG_FILE: str = ""

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        return value.upper() if isinstance(value, str) else value


settings = Settings()
