"""
Middleware for the quote service API.
Provides access logging and error handling.
"""

from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from utils import api_logger, QuoteServiceError, create_error_response


class LoggingMiddleware(BaseHTTPMiddleware):
    """访问日志中间件（DEBUG 级别，verbose 模式下可见）"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if request.client:
            client = f"{request.client.host}:{request.client.port}"
        else:
            client = "unknown"
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        http_version = request.scope.get("http_version", "1.1")
        user_agent = request.headers.get("user-agent", "")

        api_logger.debug(
            f'{client} "{request.method} {target} HTTP/{http_version}" "{user_agent}" {response.status_code}'
        )
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except QuoteServiceError as e:
            api_logger.error(f"[API] Service error: {e}")
            return JSONResponse(status_code=500, content=create_error_response(e))

        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={
                    "error": True,
                    "error_code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred"
                }
            )


def setup_middleware(app, verbose: bool = False):
    """设置所有中间件"""
    app.add_middleware(ErrorHandlingMiddleware)
    if verbose:
        app.add_middleware(LoggingMiddleware)

    api_logger.debug("[API] Middleware setup completed")
