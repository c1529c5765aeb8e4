# Todo 도메인 모델 (Beanie Document)
# - owner는 생성한 User의 id. 생성 후 변경하지 않음
# - completed_at은 epoch 밀리초. completed가 true일 때만 값이 있음

from typing import Annotated, Optional
from beanie import Document, Indexed, PydanticObjectId
from pydantic import StringConstraints

# 앞뒤 공백 제거 후 1글자 이상
TodoText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Todo(Document):
    text: TodoText
    completed: bool = False
    completed_at: Optional[int] = None
    owner: Indexed(PydanticObjectId)

    class Settings:
        name = "todos"
        validate_on_save = True
