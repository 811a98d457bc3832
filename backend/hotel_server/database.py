"""
数据库配置 - 持久化层
所有读写通过 services.storage.SqlStorageEngine 进行
"""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from hotel_server.config import settings

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite 默认不检查外键"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs):
    """创建引擎；SQLite 连接打开外键约束"""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


engine = create_db_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """依赖注入：获取数据库会话"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """初始化数据库表"""
    from hotel_server.models import ontology  # noqa
    Base.metadata.create_all(bind=bind or engine)
