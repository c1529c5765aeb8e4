# 라우터 공용 의존성
# - valid_todo_id: 경로의 Todo id 형식 확인 (잘못되면 404 빈 본문)
# - get_current_user: 보호된 라우트의 인증 게이트
#   설정된 헤더(x-auth)에서 토큰을 꺼내 AuthService로 사용자 확인
#   성공하면 request.state.user / request.state.token 에 붙여 둠

from dataclasses import dataclass

from fastapi import Depends, Request

from ..core.exceptions import UnauthenticatedError
from ..models.user import User
from ..services.auth_service import AuthService, get_auth_service
from ..services.todo_service import parse_todo_id


@dataclass
class AuthContext:
    user: User
    token: str


async def get_current_user(
    request: Request,
    service: AuthService = Depends(get_auth_service),
) -> AuthContext:
    token = request.headers.get(service.settings.AUTH_HEADER)
    if not token:
        raise UnauthenticatedError()

    user = await service.authenticate(token)
    request.state.user = user
    request.state.token = token
    return AuthContext(user=user, token=token)


def valid_todo_id(todo_id: str) -> str:
    # 본문 검증보다 먼저 실행되도록 경로 의존성으로 id 형식 확인
    parse_todo_id(todo_id)
    return todo_id
