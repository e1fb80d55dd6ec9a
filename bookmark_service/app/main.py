from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware

from .api.health import router as health_router
from .api.v1 import api_router
from .config import load_port
from .exceptions import (
    InvalidPostIDError,
    NotFoundError,
    SerializationError,
    StorageError,
)


logger = logging.getLogger(__name__)

OPERATION_FAILED_TEXT = "operation failed"


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    yield


async def _not_found_handler(request: Request, exc: Exception) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=404)


async def _invalid_post_id_handler(
    request: Request, exc: Exception
) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=400)


async def _operation_failed_handler(
    request: Request, exc: Exception
) -> PlainTextResponse:
    # 내부 상세는 로그에만 남기고 사용자에게는 일반 메시지만 돌려준다.
    logger.error(
        "bookmark operation failed: %s",
        exc,
        exc_info=exc,
        extra={
            "path": request.url.path,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
    return PlainTextResponse(OPERATION_FAILED_TEXT, status_code=500)


def create_app() -> FastAPI:
    setup_logger()
    app = FastAPI(
        title="Bookmark Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestTraceMiddleware)

    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(InvalidPostIDError, _invalid_post_id_handler)
    app.add_exception_handler(StorageError, _operation_failed_handler)
    app.add_exception_handler(SerializationError, _operation_failed_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(
        "bookmark_service.app.main:app",
        host="0.0.0.0",
        port=load_port(),
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
