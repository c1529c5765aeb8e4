# Todo 저장소 레이어
# - 모든 조회/변경은 (id, owner) 조건으로만 수행
#   다른 사용자의 Todo는 "없는 것"과 똑같이 None으로 돌아옵니다.

from typing import List, Optional
from beanie import PydanticObjectId, UpdateResponse
from ..models.todo import Todo


class TodoRepository:
    async def create(self, owner: PydanticObjectId, text: str) -> Todo:
        todo = Todo(text=text, owner=owner)
        return await todo.insert()

    async def list_for_owner(self, owner: PydanticObjectId) -> List[Todo]:
        return await Todo.find(Todo.owner == owner).to_list()

    async def get_owned(self, todo_id: PydanticObjectId, owner: PydanticObjectId) -> Optional[Todo]:
        return await Todo.find_one(Todo.id == todo_id, Todo.owner == owner)

    async def update_owned(self, todo_id: PydanticObjectId, owner: PydanticObjectId, fields: dict) -> Optional[Todo]:
        # 조회와 쓰기를 한 번의 $set으로 처리. 그 사이 삭제된 Todo를 되살리지 않음
        return await Todo.find_one(Todo.id == todo_id, Todo.owner == owner).update(
            {"$set": fields},
            response_type=UpdateResponse.NEW_DOCUMENT,
        )

    async def delete(self, todo: Todo) -> Todo:
        await todo.delete()
        return todo
