from social_sports.api import events, stats, test_data, users, whatsapp  # noqa: F401
