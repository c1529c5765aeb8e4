# Todo 서비스 레이어
# - 경로 id 형식 검증 (24자리 16진수)
# - 소유자 기준 조회/생성/수정/삭제
# - 완료 상태 갱신 규칙: completed가 true면 completed_at = 현재 시각(ms),
#   그 외에는 항상 completed=False, completed_at=None 으로 다시 계산

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from beanie import PydanticObjectId
from fastapi import Depends
from pydantic import TypeAdapter

from ..core.exceptions import MalformedIdError, TodoNotFoundError
from ..models.todo import Todo, TodoText
from ..repositories.todo_repository import TodoRepository

logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
_todo_text = TypeAdapter(TodoText)


def parse_todo_id(raw_id: str) -> PydanticObjectId:
    if not OBJECT_ID_PATTERN.match(raw_id):
        raise MalformedIdError(raw_id)
    return PydanticObjectId(raw_id)


def now_millis() -> int:
    return int(datetime.now(tz=timezone.utc).timestamp() * 1000)


class TodoService:
    def __init__(self, repo: TodoRepository):
        self.repo = repo

    async def create(self, owner: PydanticObjectId, text: str) -> Todo:
        todo = await self.repo.create(owner, text)
        logger.debug(f"[todos] Created {todo.id} for {owner}")
        return todo

    async def list(self, owner: PydanticObjectId) -> List[Todo]:
        return await self.repo.list_for_owner(owner)

    async def get(self, owner: PydanticObjectId, raw_id: str) -> Todo:
        todo_id = parse_todo_id(raw_id)
        todo = await self.repo.get_owned(todo_id, owner)
        if not todo:
            raise TodoNotFoundError(raw_id)
        return todo

    async def update(
        self,
        owner: PydanticObjectId,
        raw_id: str,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Todo:
        todo_id = parse_todo_id(raw_id)
        fields = {"completed": False, "completed_at": None}
        if completed:
            fields = {"completed": True, "completed_at": now_millis()}
        if text is not None:
            fields["text"] = _todo_text.validate_python(text)

        todo = await self.repo.update_owned(todo_id, owner, fields)
        if not todo:
            raise TodoNotFoundError(raw_id)
        return todo

    async def delete(self, owner: PydanticObjectId, raw_id: str) -> Todo:
        todo = await self.get(owner, raw_id)
        deleted = await self.repo.delete(todo)
        logger.debug(f"[todos] Deleted {raw_id} for {owner}")
        return deleted


def get_todo_service(repo: TodoRepository = Depends(TodoRepository)) -> TodoService:
    return TodoService(repo)
