# 시작 시 DB ping 재시도 검증 (실제 DB 없이 mock 사용)
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from todo_api.core.retry import create_db_retry_decorator
from todo_api.db.mongo import ping


def _client_with_ping(side_effect):
    client = MagicMock()
    client.admin.command = AsyncMock(side_effect=side_effect)
    return client


def test_retry_until_success():
    calls = []

    @create_db_retry_decorator(max_attempts=3, initial_wait=0, max_wait=0)
    async def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ServerSelectionTimeoutError("not yet")
        return "ok"

    assert asyncio.run(flaky()) == "ok"
    assert len(calls) == 3


def test_retry_does_not_catch_other_errors():
    calls = []

    @create_db_retry_decorator(max_attempts=3, initial_wait=0, max_wait=0)
    def broken():
        calls.append(1)
        raise ValueError("bug")

    with pytest.raises(ValueError):
        broken()
    assert len(calls) == 1


def test_ping_gives_up_after_configured_attempts(settings, monkeypatch):
    # 대기 없이 바로 재시도
    monkeypatch.setattr("asyncio.sleep", AsyncMock())
    client = _client_with_ping(ServerSelectionTimeoutError("down"))
    settings = settings.model_copy(update={"MONGODB_CONNECT_ATTEMPTS": 2})

    with pytest.raises(ServerSelectionTimeoutError):
        asyncio.run(ping(client, settings))
    assert client.admin.command.await_count == 2


def test_ping_ok(settings):
    client = _client_with_ping(None)
    asyncio.run(ping(client, settings))
    client.admin.command.assert_awaited_once_with("ping")
