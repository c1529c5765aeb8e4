# 요청/응답 스키마 정의 (Pydantic 모델)
# 응답에는 비밀번호 해시와 토큰 목록을 절대 포함하지 않습니다.

from pydantic import BaseModel, EmailStr

from ..models.user import User


class UserCredentials(BaseModel):
    email: EmailStr
    password: str


class UserPublic(BaseModel):
    id: str
    email: EmailStr

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(id=str(user.id), email=user.email)
