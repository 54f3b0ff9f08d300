from social_sports.hooks.base import Mutation, Query, QueryState  # noqa: F401
from social_sports.hooks.events import (  # noqa: F401
    CancelEventMutation,
    CreateEventMutation,
    EventQuery,
    EventsQuery,
    JoinEventMutation,
    MyEventsQuery,
    SportTypesQuery,
)
from social_sports.hooks.users import UserProfileQuery  # noqa: F401
from social_sports.hooks.whatsapp import WhatsAppQrCodeQuery  # noqa: F401
