"""
Pytest 配置和共享 fixtures
"""
import os

# 测试不触碰本地数据库文件，也不在启动时写入种子数据
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from decimal import Decimal
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotel_server.config import DEFAULT_SEED_FILE
from hotel_server.database import Base, create_db_engine, get_db
from hotel_server.models import ontology  # noqa
from hotel_server.hotel import Hotel, HotelRoom
from hotel_server.seed import load_seed_file, seed_lookup_tables
from hotel_server.services.repositories import (
    HotelRepository, HotelRoomRepository, RoomReservationRepository,
)
from hotel_server.services.storage import SqlStorageEngine
from hotel_server.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_db_engine(
        "sqlite:///:memory:",
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    """创建数据库会话，并写入房型/床型查找表"""
    session = session_factory()
    seed_lookup_tables(session, load_seed_file(DEFAULT_SEED_FILE))
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 仓储 Fixtures ==============

@pytest.fixture
def storage(db_session):
    return SqlStorageEngine(db_session)


@pytest.fixture
def hotel_repo(storage):
    return HotelRepository(storage)


@pytest.fixture
def room_repo(storage):
    return HotelRoomRepository(storage)


@pytest.fixture
def reservation_repo(storage):
    return RoomReservationRepository(storage)


# ============== 实体 Fixtures ==============

@pytest.fixture
def sample_hotel(hotel_repo):
    """创建测试酒店"""
    result = hotel_repo.create(Hotel(
        name="Forward Operating Base Comfort",
        address="Hellscape",
        phone_number="1-800-289-8234",
    ))
    return result.value


@pytest.fixture
def sample_room(room_repo, sample_hotel):
    """创建101房间"""
    result = room_repo.create(HotelRoom(
        room_number=101,
        hotel_id=sample_hotel.id,
        nightly_rate=Decimal("99.50"),
        number_of_beds=2,
        room_type_id=1,
        bed_type_id=1,
    ))
    return result.value
