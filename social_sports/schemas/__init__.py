from social_sports.schemas.event import (  # noqa: F401
    CORE_SPORT_TYPES,
    CancelEventRequest,
    Event,
    EventRequest,
    EventStatus,
    JoinEventRequest,
    ParsedEvent,
    ParseEventRequest,
    Participant,
    ParticipantStatus,
    SportType,
    normalize_status,
)
from social_sports.schemas.stats import PlatformStats  # noqa: F401
from social_sports.schemas.user import (  # noqa: F401
    LoginCredentials,
    LoginResponse,
    User,
    UserProfile,
    UserProfileUpdate,
    UserRegistrationRequest,
)
from social_sports.schemas.whatsapp import (  # noqa: F401
    QrCode,
    WhatsAppLinkRequest,
    WhatsAppLinkResult,
    WhatsAppStatus,
)
