from devconnector.repositories.user_repository import UserRepository
from devconnector.repositories.post_repository import PostRepository
from devconnector.repositories.profile_repository import ProfileRepository
