# 테스트 공용 픽스처
# - 실제 MongoDB 대신 mongomock_motor의 in-memory client로 Beanie 초기화
# - bcrypt cost는 최소값(4)으로 낮춰 테스트 속도 확보

import asyncio
import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from todo_api.core.config import Settings
from todo_api.db.mongo import init_db
from todo_api.main import create_app


@pytest.fixture
def settings():
    return Settings(
        JWT_SECRET_KEY="test-secret",
        MONGODB_DB="todo_test",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
        _env_file=None,
    )


@pytest.fixture
def db(settings):
    client = AsyncMongoMockClient()
    asyncio.run(init_db(settings, client=client))
    return client


@pytest.fixture
def client(settings, db):
    app = create_app(settings, mongo_client=db)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register_user(client):
    # 가입 후 (응답 본문, x-auth 토큰) 반환
    def _register(email="a@x.com", password="secret1"):
        res = client.post("/users", json={"email": email, "password": password})
        assert res.status_code == 200
        return res.json(), res.headers["x-auth"]

    return _register
