# User 도메인 모델 (Beanie Document)
# - 이메일, 비밀번호 해시, 활성 세션 토큰 목록, 생성일
# - 이메일은 unique 인덱스

from datetime import datetime
from typing import List
from beanie import Document, Indexed
from pydantic import BaseModel, EmailStr, Field


class AuthToken(BaseModel):
    access: str  # 토큰 용도 (항상 "auth")
    token: str


class User(Document):
    email: Indexed(EmailStr, unique=True)  # 중복 방지 인덱스
    password: str = Field(repr=False)  # bcrypt 해시. 평문은 저장하지 않음
    tokens: List[AuthToken] = Field(default_factory=list, repr=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"  # 컬렉션명
