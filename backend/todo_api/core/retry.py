# 재시도 로직 유틸리티
# MongoDB가 컨테이너 등에서 늦게 뜨는 경우 시작 시점의 연결 확인이 실패할 수 있습니다.
# tenacity 라이브러리로 지수 백오프 재시도를 적용합니다.
# 요청 처리 중에는 재시도하지 않습니다 (실패는 곧바로 응답으로 보고).

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
    after_log,
)
import logging
from typing import Type, Tuple

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


def create_db_retry_decorator(
    max_attempts: int = 3,
    initial_wait: float = 1.0,
    max_wait: float = 10.0,
    exceptions: Tuple[Type[Exception], ...] = (PyMongoError,)
):
    """
    DB 연결 확인용 재시도 데코레이터를 생성하는 팩토리 함수입니다.

    1. max_attempts: 최대 시도 횟수 (처음 1번 + 재시도 포함)
    2. initial_wait: 첫 재시도 전 대기 시간 (초)
    3. max_wait: 최대 대기 시간 (초)
    4. exceptions: 재시도할 예외 타입

    마지막 시도까지 실패하면 원래 예외를 그대로 다시 던집니다 (reraise=True).
    동기 함수와 async 함수 모두에 붙일 수 있습니다.

    사용 예시:
        @create_db_retry_decorator(max_attempts=5)
        async def ping():
            await client.admin.command("ping")
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=2,
            min=initial_wait,
            max=max_wait
        ),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        after=after_log(logger, logging.DEBUG),
        reraise=True,
    )
