# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보
# - 전역 객체 대신 get_settings()로 한 번 만들고, 필요한 곳에 명시적으로 전달

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트 루트 디렉토리 경로 찾기
# 이 파일은 backend/todo_api/core/config.py에 있으므로 4단계 위가 프로젝트 루트입니다.
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "todo-api"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    # 라우터 공통 prefix. 기본값은 빈 문자열 (/users, /todos 그대로 노출)
    API_PREFIX: str = ""

    MONGODB_URI: str = "mongodb://localhost:27017/TodoApp"
    # URI에 데이터베이스 이름이 없을 때 사용할 이름
    MONGODB_DB: Optional[str] = None
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000
    MONGODB_CONNECT_ATTEMPTS: int = 3

    JWT_SECRET_KEY: str = Field(..., description="토큰 서명에 사용되는 비밀키. 반드시 강력한 랜덤 문자열로 설정하세요.")
    JWT_ALGORITHM: str = "HS256"
    # None이면 만료 없음. 로그아웃(토큰 목록에서 제거)으로만 폐기됩니다.
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    AUTH_HEADER: str = "x-auth"
    AUTH_TOKEN_SCOPE: str = "auth"

    PASSWORD_MIN_LENGTH: int = 6
    BCRYPT_ROUNDS: int = 10

    CORS_ALLOW_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def cors_origins(self) -> list:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
