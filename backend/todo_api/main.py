# FastAPI 진입점
# - 설정 객체를 만들어 app.state.settings 에 보관 (전역 상태 대신 의존성으로 전달)
# - Beanie ODM 초기화 (MongoDB)
# - 라우터 등록, CORS 설정
# - 도메인 예외 -> HTTP 응답 변환

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from .core.config import Settings, get_settings
from .core.exceptions import (
    DataValidationError,
    InvalidCredentialsError,
    MalformedIdError,
    TodoNotFoundError,
    UnauthenticatedError,
)
from .db.mongo import init_db
from .api.v1.users import router as users_router
from .api.v1.todos import router as todos_router

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)

    @app.exception_handler(MalformedIdError)
    async def malformed_id_handler(request: Request, exc: MalformedIdError):
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(TodoNotFoundError)
    async def todo_not_found_handler(request: Request, exc: TodoNotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": exc.message})

    @app.exception_handler(DataValidationError)
    async def data_validation_handler(request: Request, exc: DataValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": exc.message, "field": exc.field_name},
        )

    @app.exception_handler(InvalidCredentialsError)
    async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": exc.message})

    # 요청 본문 검증 실패도 422가 아닌 400으로 응답
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
        )

    # Document 생성/저장 시 스키마 검증 실패 (예: 공백뿐인 text)
    @app.exception_handler(ValidationError)
    async def document_validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid data", "errors": jsonable_encoder(exc.errors(include_url=False))},
        )

    # 저장소 오류는 검증 오류와 구분하지 않고 400으로 응답 (로그에는 남김)
    @app.exception_handler(PyMongoError)
    async def store_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"[mongo] Store error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": "Database error"})


def create_app(settings: Optional[Settings] = None, mongo_client=None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app = FastAPI(
        title="Todo API",
        description="사용자 토큰 인증 + 사용자별 Todo CRUD",
        version="1.0.0"
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[settings.AUTH_HEADER],
    )

    # Beanie 초기화 (앱 시작 시 1회)
    @app.on_event("startup")
    async def app_init():
        app.state.mongo_client = await init_db(settings, client=mongo_client)
        logger.info(f"[{settings.APP_NAME}] Started ({settings.ENV})")

    @app.on_event("shutdown")
    async def app_shutdown():
        client = getattr(app.state, "mongo_client", None)
        # 외부에서 넘겨받은 client는 호출한 쪽이 닫음
        if client is not None and mongo_client is None:
            client.close()

    # 간단한 헬스체크
    @app.get("/")
    async def root():
        return {"ok": True, "app": settings.APP_NAME, "time": datetime.utcnow().isoformat()}

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "app": settings.APP_NAME, "version": app.version}

    register_exception_handlers(app)
    app.include_router(users_router, prefix=settings.API_PREFIX)
    app.include_router(todos_router, prefix=settings.API_PREFIX)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("todo_api.main:app", host=_settings.HOST, port=_settings.PORT)
