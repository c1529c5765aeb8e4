# AuthService 테스트 (in-memory MongoDB)
import asyncio
from unittest.mock import patch

import pytest
from pymongo.errors import DuplicateKeyError

from todo_api.core.exceptions import DataValidationError, InvalidCredentialsError, UnauthenticatedError
from todo_api.core.security import issue_token
from todo_api.models.user import User
from todo_api.repositories.user_repository import UserRepository
from todo_api.services.auth_service import AuthService


@pytest.fixture
def service(settings, db):
    return AuthService(UserRepository(), settings)


def test_register_then_login_returns_same_user(service):
    user, token = asyncio.run(service.register("a@x.com", "secret1"))
    logged_in, login_token = asyncio.run(service.login("a@x.com", "secret1"))

    assert logged_in.id == user.id
    assert token and login_token


def test_register_stores_hash_and_first_session(service):
    user, token = asyncio.run(service.register("a@x.com", "secret1"))
    stored = asyncio.run(User.get(user.id))

    assert stored.password != "secret1"
    assert stored.password.startswith("$2")
    assert [t.token for t in stored.tokens] == [token]
    assert stored.tokens[0].access == "auth"


def test_register_rejects_short_password(service):
    with pytest.raises(DataValidationError) as exc_info:
        asyncio.run(service.register("a@x.com", "123"))
    assert exc_info.value.field_name == "password"


def test_register_rejects_duplicate_email(service):
    asyncio.run(service.register("a@x.com", "secret1"))
    with pytest.raises(DataValidationError) as exc_info:
        asyncio.run(service.register("a@x.com", "another1"))
    assert exc_info.value.field_name == "email"


def test_login_failure_is_uniform(service):
    asyncio.run(service.register("a@x.com", "secret1"))

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        asyncio.run(service.login("a@x.com", "wrong-pw"))
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        asyncio.run(service.login("nobody@x.com", "secret1"))
    assert wrong_password.value.message == unknown_email.value.message


def test_multiple_sessions(service):
    user, first = asyncio.run(service.register("a@x.com", "secret1"))
    _, second = asyncio.run(service.login("a@x.com", "secret1"))

    assert asyncio.run(service.authenticate(first)).id == user.id
    assert asyncio.run(service.authenticate(second)).id == user.id


def test_revoked_token_is_rejected(service):
    user, token = asyncio.run(service.register("a@x.com", "secret1"))
    assert asyncio.run(service.authenticate(token)).id == user.id

    asyncio.run(service.logout(user, token))
    with pytest.raises(UnauthenticatedError):
        asyncio.run(service.authenticate(token))


def test_logout_is_idempotent(service):
    user, token = asyncio.run(service.register("a@x.com", "secret1"))
    asyncio.run(service.logout(user, token))
    asyncio.run(service.logout(user, token))

    stored = asyncio.run(User.get(user.id))
    assert stored.tokens == []


def test_logout_keeps_other_sessions(service):
    user, first = asyncio.run(service.register("a@x.com", "secret1"))
    _, second = asyncio.run(service.login("a@x.com", "secret1"))

    asyncio.run(service.logout(user, first))
    assert asyncio.run(service.authenticate(second)).id == user.id


def test_authenticate_rejects_garbage(service):
    with pytest.raises(UnauthenticatedError):
        asyncio.run(service.authenticate("not-a-jwt"))


def test_authenticate_rejects_signed_but_unknown_token(service, settings):
    user, _ = asyncio.run(service.register("a@x.com", "secret1"))
    # 서명은 유효하지만 사용자 토큰 목록에 없는 토큰
    forged = issue_token(str(user.id), "auth", settings)
    with pytest.raises(UnauthenticatedError):
        asyncio.run(service.authenticate(forged))


def test_authenticate_rejects_bad_user_id(service, settings):
    with pytest.raises(UnauthenticatedError):
        asyncio.run(service.authenticate(issue_token("not-an-object-id", "auth", settings)))


def test_register_duplicate_key_race(service):
    # 중복 확인은 통과했지만 insert 시점에 unique 인덱스에 걸린 경우
    with patch.object(UserRepository, "create", side_effect=DuplicateKeyError("dup email")):
        with pytest.raises(DataValidationError) as exc_info:
            asyncio.run(service.register("a@x.com", "secret1"))
    assert exc_info.value.field_name == "email"
