"""
Hotel Server 主应用入口
Hotel / HotelRoom / RoomReservation 的 CRUD 服务
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from entity_core.engine.storage import StorageFatalError
from entity_core.result import ResultKind
from hotel_server.config import settings
from hotel_server.database import SessionLocal, init_db
from hotel_server.models.schemas import ErrorDetail
from hotel_server.routers import hotels, hotel_rooms, room_reservations

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    configure_logging()

    # 初始化数据库
    init_db()

    # 写入种子数据
    if settings.SEED_ON_STARTUP:
        from hotel_server.seed import seed_database
        seed_db = SessionLocal()
        try:
            stats = seed_database(seed_db, settings.SEED_DATA_FILE, include_demo=settings.SEED_DEMO_DATA)
            if any(stats.values()):
                logger.info(f"Seed data loaded: {stats}")
        finally:
            seed_db.close()

    yield


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    description="Hotel, HotelRoom and RoomReservation records with optimistic concurrency",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageFatalError)
async def storage_fatal_error_handler(request: Request, exc: StorageFatalError):
    """存储层不可恢复错误 → 500"""
    logger.error(f"Fatal storage error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"kind": "fatal", "message": "Internal storage error"}},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """请求体类型错误 → 400，与仓储校验错误同一格式"""
    error = exc.errors()[0]
    names = [part for part in error.get("loc", ())
             if isinstance(part, str) and part not in ("body", "path", "query")]
    detail = ErrorDetail(
        kind=ResultKind.VALIDATION_ERROR.value,
        message=error.get("msg", "Invalid request"),
        field=names[-1] if names else None,
    )
    logger.info(f"Rejected {request.method} {request.url.path}: {detail.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail.model_dump()},
    )


# 注册路由
app.include_router(hotels.router)
app.include_router(hotel_rooms.router)
app.include_router(room_reservations.router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": settings.APP_NAME}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hotel_server.main:app", reload=settings.DEBUG)
