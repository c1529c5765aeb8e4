# 사용자 라우터
# - 회원가입: POST /users          (응답 헤더 x-auth 로 토큰 전달)
# - 로그인:   POST /users/login    (응답 헤더 x-auth 로 토큰 전달)
# - 내 정보:  GET /users/me        (인증 필요)
# - 로그아웃: DELETE /users/me/token (인증 필요, 현재 토큰만 폐기)

from fastapi import APIRouter, Depends, Response

from ...schemas.user_schema import UserCredentials, UserPublic
from ...services.auth_service import AuthService, get_auth_service
from ..deps import AuthContext, get_current_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserPublic, summary="회원가입 (이메일 중복 체크 포함, 토큰 발급)")
async def register(
    payload: UserCredentials,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    user, token = await service.register(payload.email, payload.password)
    response.headers[service.settings.AUTH_HEADER] = token
    return UserPublic.from_user(user)


@router.post("/login", response_model=UserPublic, summary="로그인 (새 토큰 발급)")
async def login(
    payload: UserCredentials,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    user, token = await service.login(payload.email, payload.password)
    response.headers[service.settings.AUTH_HEADER] = token
    return UserPublic.from_user(user)


@router.get("/me", response_model=UserPublic, summary="현재 로그인한 사용자")
async def me(auth: AuthContext = Depends(get_current_user)):
    return UserPublic.from_user(auth.user)


@router.delete("/me/token", summary="로그아웃 (현재 토큰 폐기)")
async def logout(
    auth: AuthContext = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    await service.logout(auth.user, auth.token)
    return Response(status_code=200)
