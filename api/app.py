"""
FastAPI application for the quote service.
"""

from fastapi import FastAPI

from store import QuoteStore
from utils import api_logger

from .routes import router
from .middleware import setup_middleware


def create_app(store: QuoteStore, verbose: bool = False) -> FastAPI:
    """创建绑定到指定语录存储的 FastAPI 应用"""
    app = FastAPI(
        title="Quote Service",
        description="Serves a random quote from a file or remote quote source",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None
    )
    app.state.store = store

    # 设置中间件
    setup_middleware(app, verbose=verbose)

    # 添加路由
    app.include_router(router)

    api_logger.debug("[API] Application created")
    return app
