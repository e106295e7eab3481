import asyncio

from devconnector.config import settings
from devconnector.core.security import get_password_hash, create_access_token
from devconnector.database import create_motor_client, init_mongo, close_mongo
from devconnector.models.user import User
from devconnector.repositories import UserRepository

TEST_EMAIL = "user@example.com"
TEST_PASSWORD = "strongpassword"

async def create_test_user():
    """테스트용 사용자 계정 생성"""
    client = create_motor_client(settings)
    try:
        await init_mongo(client[settings.MONGO_DB_NAME])
        users = UserRepository()

        # 기존 사용자 확인
        existing_user = await users.get_by_email(TEST_EMAIL)
        if existing_user:
            print(" 테스트 사용자가 이미 존재합니다.")
            print(f"   ID: {existing_user.id}")
            print(f"   이메일: {existing_user.email}")
            print(f"   토큰: {create_access_token({'sub': str(existing_user.id)})}")
            return existing_user

        # 새 사용자 생성
        test_user = await users.create(User(
            name="Test User",
            email=TEST_EMAIL,
            password=get_password_hash(TEST_PASSWORD),
            avatar="https://www.gravatar.com/avatar/?d=mm",
        ))

        print("✅ 테스트 사용자 생성 완료")
        print(f"   ID: {test_user.id}")
        print(f"   이메일: {test_user.email}")
        print(f"   비밀번호: {TEST_PASSWORD}")
        print(f"   토큰: {create_access_token({'sub': str(test_user.id)})}")

        return test_user

    except Exception as e:
        print(f"❌ 사용자 생성 실패: {e}")
        return None
    finally:
        await close_mongo(client)

if __name__ == "__main__":
    asyncio.run(create_test_user())
