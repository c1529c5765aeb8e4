# 인증 서비스 레이어
# - 회원가입 (비밀번호 길이 검증, 이메일 중복 체크, 해싱 후 저장, 첫 토큰 발급)
# - 로그인 (비밀번호 검증, 토큰 발급 후 사용자 토큰 목록에 추가)
# - 로그아웃 (토큰 목록에서 제거)
# - 요청 인증 (서명 검증 + 토큰 목록에 아직 남아 있는지 확인)

import logging
from typing import Tuple

from bson.errors import InvalidId
from beanie import PydanticObjectId
from fastapi import Depends, Request
from pydantic import EmailStr
from pymongo.errors import DuplicateKeyError

from ..core.config import Settings
from ..core.exceptions import (
    DataValidationError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthenticatedError,
)
from ..core.security import get_password_hash, verify_password, issue_token, verify_token
from ..models.user import AuthToken, User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo: UserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    async def register(self, email: EmailStr, password: str) -> Tuple[User, str]:
        if len(password) < self.settings.PASSWORD_MIN_LENGTH:
            raise DataValidationError(
                "password",
                f"Password must be at least {self.settings.PASSWORD_MIN_LENGTH} characters",
            )
        existing = await self.repo.get_by_email(email)
        if existing:
            raise DataValidationError("email", "Email already registered")

        hashed = get_password_hash(password, rounds=self.settings.BCRYPT_ROUNDS)
        try:
            user = await self.repo.create(email, hashed)
        except DuplicateKeyError:
            # 사전 확인과 insert 사이에 같은 이메일이 먼저 저장된 경우
            raise DataValidationError("email", "Email already registered")

        token = await self._open_session(user)
        logger.info(f"[auth] Registered user {user.id}")
        return user, token

    async def login(self, email: EmailStr, password: str) -> Tuple[User, str]:
        user = await self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password):
            logger.info("[auth] Login failed")
            raise InvalidCredentialsError()
        token = await self._open_session(user)
        logger.info(f"[auth] User {user.id} logged in")
        return user, token

    async def logout(self, user: User, token: str) -> None:
        await self.repo.remove_token(user, token)
        logger.info(f"[auth] User {user.id} logged out")

    async def authenticate(self, token: str) -> User:
        try:
            payload = verify_token(token, self.settings)
            user_id = PydanticObjectId(payload.user_id)
        except (InvalidTokenError, InvalidId) as e:
            logger.debug(f"[auth] Rejected token: {e}")
            raise UnauthenticatedError() from e

        if payload.scope != self.settings.AUTH_TOKEN_SCOPE:
            raise UnauthenticatedError()

        # 서명이 유효해도 로그아웃된 토큰이면 거부
        user = await self.repo.get_by_token(user_id, token, payload.scope)
        if not user:
            logger.debug(f"[auth] Token for user {user_id} is not active")
            raise UnauthenticatedError()
        return user

    async def _open_session(self, user: User) -> str:
        scope = self.settings.AUTH_TOKEN_SCOPE
        token = issue_token(str(user.id), scope, self.settings)
        await self.repo.add_token(user, AuthToken(access=scope, token=token))
        return token


def get_auth_service(request: Request, repo: UserRepository = Depends(UserRepository)) -> AuthService:
    return AuthService(repo, request.app.state.settings)
