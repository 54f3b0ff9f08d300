from social_sports.api.base import parse
from social_sports.client import ApiClient
from social_sports.schemas.stats import PlatformStats


async def get_platform_stats(client: ApiClient) -> PlatformStats:
    return parse(PlatformStats, await client.request("/stats", requires_auth=False))
