# 보안/인증 유틸리티
# - 비밀번호 해싱/검증 (bcrypt)
# - 세션 토큰 발급/검증 (JWT, 서명만 확인. 폐기 여부는 AuthService에서 확인)

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from uuid import uuid4

from passlib.context import CryptContext
import jwt

from .config import Settings
from .exceptions import InvalidTokenError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@lru_cache
def get_password_context(rounds: int) -> CryptContext:
    return pwd_context.copy(bcrypt__rounds=rounds)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # 해시 안에 cost가 들어 있으므로 rounds 설정과 무관하게 검증됩니다.
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str, rounds: int) -> str:
    return get_password_context(rounds).hash(password)


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    scope: str


def issue_token(user_id: str, scope: str, settings: Settings) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "_id": str(user_id),
        "access": scope,
        "iat": now,
        # 같은 초에 발급된 토큰끼리도 구분되도록
        "jti": uuid4().hex,
    }
    if settings.ACCESS_TOKEN_EXPIRE_MINUTES is not None:
        payload["exp"] = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, settings: Settings) -> TokenPayload:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e

    user_id = payload.get("_id")
    scope = payload.get("access")
    if not isinstance(user_id, str) or not isinstance(scope, str):
        raise InvalidTokenError("malformed token payload")
    return TokenPayload(user_id=user_id, scope=scope)
