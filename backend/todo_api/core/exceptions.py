# 커스텀 예외 클래스 정의
# HTTP 상태 코드로의 변환은 main.py의 예외 핸들러에서 한 곳에 모아 처리합니다.
# - DataValidationError, InvalidCredentialsError -> 400
# - UnauthenticatedError -> 401 (빈 본문)
# - MalformedIdError -> 404 (빈 본문), TodoNotFoundError -> 404 (메시지)


class TodoAppError(Exception):
    """Todo API 관련 기본 예외 클래스

    try-except 블록에서 이 앱이 던지는 예외만 골라 잡을 때 사용합니다.
    """
    pass


class DataValidationError(TodoAppError):
    """입력값 검증 실패 시 발생하는 예외

    예를 들어, 비밀번호가 너무 짧거나 이미 가입된 이메일인 경우입니다.

    Attributes:
        field_name: 검증 실패한 필드 이름
        message: 에러 메시지
    """
    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        self.message = message
        super().__init__(f"데이터 검증 실패 [{field_name}]: {message}")


class InvalidCredentialsError(TodoAppError):
    """로그인 실패 시 발생하는 예외

    없는 이메일과 틀린 비밀번호를 구분하지 않습니다.
    어떤 이메일이 가입되어 있는지 외부에 드러나지 않게 하기 위함입니다.
    """
    def __init__(self, message: str = "Invalid credentials"):
        self.message = message
        super().__init__(message)


class InvalidTokenError(TodoAppError):
    """토큰 서명이 틀리거나, 만료되었거나, payload 형식이 잘못된 경우"""
    pass


class UnauthenticatedError(TodoAppError):
    """요청을 인증할 수 없는 경우 (토큰 없음 / 잘못됨 / 폐기됨)"""
    pass


class MalformedIdError(TodoAppError):
    """경로의 id가 24자리 16진수 형식이 아닌 경우

    Attributes:
        raw_id: 요청에 들어온 원래 값
    """
    def __init__(self, raw_id: str):
        self.raw_id = raw_id
        super().__init__(f"잘못된 id 형식: {raw_id!r}")


class TodoNotFoundError(TodoAppError):
    """id는 올바르지만 해당 사용자의 Todo가 없는 경우

    다른 사용자의 Todo도 같은 예외로 처리되어, 존재 여부가 드러나지 않습니다.
    """
    def __init__(self, todo_id: str, message: str = "Todo not found"):
        self.todo_id = todo_id
        self.message = message
        super().__init__(message)
