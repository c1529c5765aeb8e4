# 사용자 저장소 레이어
# - 데이터 접근(조회/생성/토큰 목록 변경)만 담당 (서비스 로직 분리)
# - 토큰 추가/삭제는 $push / $pull 원자적 업데이트 (동시 로그인 시 세션 유실 방지)

from typing import Optional
from beanie import PydanticObjectId
from pydantic import EmailStr
from ..models.user import AuthToken, User


class UserRepository:
    async def get_by_email(self, email: EmailStr) -> Optional[User]:
        return await User.find_one(User.email == email)

    async def create(self, email: EmailStr, hashed_password: str) -> User:
        user = User(email=email, password=hashed_password)
        return await user.insert()

    async def get_by_token(self, user_id: PydanticObjectId, token: str, scope: str) -> Optional[User]:
        # 같은 원소 안에서 token과 access가 모두 일치해야 함
        return await User.find_one(
            User.id == user_id,
            {"tokens": {"$elemMatch": {"token": token, "access": scope}}},
        )

    async def add_token(self, user: User, entry: AuthToken) -> None:
        await User.find_one(User.id == user.id).update({"$push": {"tokens": entry.model_dump()}})
        user.tokens.append(entry)

    async def remove_token(self, user: User, token: str) -> None:
        await User.find_one(User.id == user.id).update({"$pull": {"tokens": {"token": token}}})
        user.tokens = [t for t in user.tokens if t.token != token]
