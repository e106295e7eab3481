"""
Pytest 테스트 설정
인메모리 MongoDB(mongomock-motor), 테스트 사용자, 인증 헤더, HTTP 클라이언트 제공
"""

import uuid

import pytest
from beanie import init_beanie
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from devconnector.context import AppContext, get_context
from devconnector.core.security import create_access_token, get_password_hash
from devconnector.main import app
from devconnector.models import DOCUMENT_MODELS, User

TEST_PASSWORD = "strongpassword"


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt 해시는 느리므로 세션당 한 번만 계산
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
async def mongo_db():
    """테스트마다 새 인메모리 DB 로 비니를 초기화"""
    client = AsyncMongoMockClient()
    database = client[f"devconnector_test_{uuid.uuid4().hex[:8]}"]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    yield database


@pytest.fixture
def context(mongo_db):
    return AppContext()


@pytest.fixture
async def client(context):
    """실행 컨텍스트를 테스트 컨텍스트로 바꾼 API 클라이언트"""
    app.dependency_overrides[get_context] = lambda: context
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def make_user(name: str, password_hash: str, avatar: str = None) -> User:
    user = User(
        name=name,
        email=f"{uuid.uuid4().hex[:8]}@example.com",
        password=password_hash,
        avatar=avatar,
    )
    await user.insert()
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
async def test_user(mongo_db, password_hash):
    return await make_user("Test User", password_hash, avatar="https://example.com/a.png")


@pytest.fixture
async def other_user(mongo_db, password_hash):
    return await make_user("Other User", password_hash)


@pytest.fixture
def headers(test_user):
    return auth_headers(test_user)
