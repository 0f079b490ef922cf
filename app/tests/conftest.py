import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.app import create_app
from app.crud.product import CRUDProduct
from app.db.base import Base
from app.db.core import get_db_session
from app.models import ProductRecord  # noqa: F401
from app.services.product_service import ProductService


@pytest.fixture
async def db_engine():
    """In-memory database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)  # Clean slate
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        autoflush=False,
        expire_on_commit=False
    )


@pytest.fixture
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session


@pytest.fixture
def crud(db_session):
    return CRUDProduct(db_session)


@pytest.fixture
def product_service(crud):
    return ProductService(crud)


@pytest.fixture
async def client(db_session_factory):
    app = create_app()

    async def override_db_session():
        async with db_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
