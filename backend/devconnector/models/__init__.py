from devconnector.models.user import User
from devconnector.models.post import Post
from devconnector.models.profile import Profile, Experience, Education, Social

# init_beanie 에 등록할 문서 모델 목록
DOCUMENT_MODELS = [User, Post, Profile]
