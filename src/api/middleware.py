"""
API 미들웨어 모듈
"""
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from src.utils.logger import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청 로깅 미들웨어"""

    async def dispatch(self, request: Request, call_next):
        """요청 처리 및 로깅"""
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        logger.info(f"요청 수신: {method} {path} - IP: {client_ip}")
        if method in ["POST", "PUT", "PATCH"]:
            logger.debug(f"요청 크기: {request.headers.get('content-length', 'unknown')} bytes")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"요청 처리 실패: {method} {path} - "
                f"오류: {str(e)} - "
                f"소요 시간: {process_time:.3f}초"
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"응답 완료: {method} {path} - "
            f"상태: {response.status_code} - "
            f"소요 시간: {process_time:.3f}초"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response
