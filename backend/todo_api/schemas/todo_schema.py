# Todo 요청/응답 스키마
# - 요청 본문에서 text, completed 외의 필드는 무시됩니다 (pydantic 기본 동작)
# - 응답 필드명은 클라이언트 규약에 맞춰 completedAt(camelCase)

from typing import List, Optional
from pydantic import BaseModel, StrictBool

from ..models.todo import Todo, TodoText


class TodoCreate(BaseModel):
    text: str  # 공백/빈 문자열 검증은 Todo Document가 담당


class TodoUpdate(BaseModel):
    text: Optional[TodoText] = None
    completed: Optional[StrictBool] = None  # "true", 1 같은 값은 400


class TodoPublic(BaseModel):
    id: str
    text: str
    completed: bool
    completedAt: Optional[int] = None
    owner: str

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoPublic":
        return cls(
            id=str(todo.id),
            text=todo.text,
            completed=todo.completed,
            completedAt=todo.completed_at,
            owner=str(todo.owner),
        )


class TodoEnvelope(BaseModel):
    todo: TodoPublic


class TodoList(BaseModel):
    todos: List[TodoPublic]
