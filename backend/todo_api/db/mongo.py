# MongoDB 연결 + Beanie 초기화
# - 설정 객체로부터 AsyncIOMotorClient 생성 (앱 시작 시 1회)
# - ping은 tenacity로 재시도 (DB가 늦게 뜨는 환경 대비)
# - 테스트에서는 client를 직접 넘겨 in-memory DB를 사용할 수 있음

import logging
from typing import Optional

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from ..core.config import Settings
from ..core.retry import create_db_retry_decorator
from ..models.todo import Todo
from ..models.user import User

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [User, Todo]


def create_client(settings: Settings) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        settings.MONGODB_URI,
        serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    )


async def ping(client, settings: Settings) -> None:
    @create_db_retry_decorator(max_attempts=settings.MONGODB_CONNECT_ATTEMPTS)
    async def _ping():
        await client.admin.command("ping")

    await _ping()


def get_database(client, settings: Settings):
    if settings.MONGODB_DB:
        return client[settings.MONGODB_DB]
    # URI에 데이터베이스 이름이 포함되어 있어야 함 (mongodb://host:port/TodoApp)
    return client.get_default_database()


async def init_db(settings: Settings, client=None):
    """
    Beanie ODM을 초기화하고 사용한 client를 반환합니다.

    client를 넘기지 않으면 설정값으로 새 Motor client를 만들고,
    실제로 연결되는지 ping으로 먼저 확인합니다.
    연결에 끝내 실패하면 PyMongoError가 그대로 올라가 앱 시작이 중단됩니다.
    """
    if client is None:
        client = create_client(settings)
        await ping(client, settings)

    db = get_database(client, settings)
    logger.info(f"[mongo] Using database: {db.name}")
    await init_beanie(database=db, document_models=DOCUMENT_MODELS)
    return client
