"""
API routes for the quote service.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from store import QuoteStore
from .models import HealthResponse, HealthStatusEnum

router = APIRouter()


def get_store(request: Request) -> QuoteStore:
    """从应用状态中获取共享的语录存储"""
    return request.app.state.store


# 同步端点：由 FastAPI 在线程池中执行，每个请求独立线程
@router.get("/", response_class=PlainTextResponse, tags=["Quotes"])
def get_quote(store: QuoteStore = Depends(get_store)):
    """返回一条语录；无可用语录时返回 503"""
    selection = store.select()
    if selection is None:
        return Response(status_code=503)
    return PlainTextResponse(selection + "\n")


@router.get("/health", response_model=HealthResponse, tags=["System"])
def health_check(store: QuoteStore = Depends(get_store)):
    """健康检查：至少有一条语录时返回 200，否则 503"""
    snapshot = store.snapshot()
    healthy = len(snapshot.quotes) > 0

    health = HealthResponse(
        status=HealthStatusEnum.HEALTHY if healthy else HealthStatusEnum.UNAVAILABLE,
        quotes=len(snapshot.quotes),
        cache_enabled=store.cache_enabled,
        loaded_at=(
            datetime.fromtimestamp(snapshot.loaded_at, tz=timezone.utc)
            if snapshot.loaded_at is not None else None
        )
    )
    return JSONResponse(
        status_code=200 if healthy else 503,
        content=health.model_dump(mode="json")
    )
