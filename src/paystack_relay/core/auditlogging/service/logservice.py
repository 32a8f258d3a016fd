import sys
import time

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )


class APILoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with its status and processing time"""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        client_host = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as e:
            processing_time = (time.perf_counter() - start) * 1000
            logger.error(f"{client_host} {request.method} {request.url.path} - Error: {e} ({processing_time:.1f}ms)")
            raise

        processing_time = (time.perf_counter() - start) * 1000
        logger.info(f"{client_host} {request.method} {request.url.path} - {response.status_code} ({processing_time:.1f}ms)")
        return response
