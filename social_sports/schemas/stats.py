"""Pydantic schema for platform statistics."""
from social_sports.schemas.base import CamelModel


class PlatformStats(CamelModel):
    active_players: int = 0
    games_weekly: int = 0
    padel_venues: int = 0
    player_rating: float = 0.0
