from typing import Optional

from social_sports.api import users as users_api
from social_sports.client import ApiClient
from social_sports.hooks.base import Query
from social_sports.schemas.user import UserProfile


class UserProfileQuery(Query[UserProfile]):
    description = "user profile"

    def __init__(self, client: ApiClient, user_id: Optional[str]):
        super().__init__(client)
        self.user_id = user_id

    @property
    def profile(self) -> Optional[UserProfile]:
        return self.data

    def should_fetch(self) -> bool:
        return bool(self.user_id)

    async def _fetch(self) -> UserProfile:
        return await users_api.get_user_profile(self.client, self.user_id)
