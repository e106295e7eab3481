from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from beanie import init_beanie
from devconnector.config import Settings
from devconnector.models import DOCUMENT_MODELS


def create_motor_client(settings: Settings) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        settings.MONGO_URI,
        serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
    )

async def init_mongo(database: AsyncIOMotorDatabase):
    """비니(Beanie) 문서 모델을 초기화하고 인덱스를 생성합니다."""
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)

async def close_mongo(client: AsyncIOMotorClient):
    """MongoDB 연결을 안전하게 종료합니다."""
    if client:
        client.close()
