# Todo 라우터 (모두 인증 필요)
# - POST   /todos       : 생성
# - GET    /todos       : 내 Todo 목록
# - GET    /todos/{id}  : 단건 조회
# - PATCH  /todos/{id}  : text / completed 수정
# - DELETE /todos/{id}  : 삭제 후 삭제된 Todo 반환
#
# id 형식이 잘못되면 404 (빈 본문), 없거나 남의 Todo면 404 {"message": ...}

from fastapi import APIRouter, Depends

from ...schemas.todo_schema import TodoCreate, TodoEnvelope, TodoList, TodoPublic, TodoUpdate
from ...services.todo_service import TodoService, get_todo_service
from ..deps import AuthContext, get_current_user, valid_todo_id

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={404: {"description": "Not Found"}},
)


@router.post("", response_model=TodoPublic, summary="Todo 생성")
async def create_todo(
    payload: TodoCreate,
    auth: AuthContext = Depends(get_current_user),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.create(auth.user.id, payload.text)
    return TodoPublic.from_todo(todo)


@router.get("", response_model=TodoList, summary="내 Todo 목록")
async def list_todos(
    auth: AuthContext = Depends(get_current_user),
    service: TodoService = Depends(get_todo_service),
):
    todos = await service.list(auth.user.id)
    return TodoList(todos=[TodoPublic.from_todo(t) for t in todos])


@router.get("/{todo_id}", response_model=TodoEnvelope, summary="Todo 단건 조회")
async def get_todo(
    auth: AuthContext = Depends(get_current_user),
    todo_id: str = Depends(valid_todo_id),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.get(auth.user.id, todo_id)
    return TodoEnvelope(todo=TodoPublic.from_todo(todo))


@router.patch("/{todo_id}", response_model=TodoEnvelope, summary="Todo 수정 (text, completed)")
async def update_todo(
    payload: TodoUpdate,
    auth: AuthContext = Depends(get_current_user),
    todo_id: str = Depends(valid_todo_id),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.update(auth.user.id, todo_id, text=payload.text, completed=payload.completed)
    return TodoEnvelope(todo=TodoPublic.from_todo(todo))


@router.delete("/{todo_id}", response_model=TodoEnvelope, summary="Todo 삭제")
async def delete_todo(
    auth: AuthContext = Depends(get_current_user),
    todo_id: str = Depends(valid_todo_id),
    service: TodoService = Depends(get_todo_service),
):
    todo = await service.delete(auth.user.id, todo_id)
    return TodoEnvelope(todo=TodoPublic.from_todo(todo))
