"""Tests for user, WhatsApp, stats and test-data endpoint wrappers."""
import pytest

from social_sports.api import stats as stats_api
from social_sports.api import test_data as test_data_api
from social_sports.api import users as users_api
from social_sports.api import whatsapp as whatsapp_api
from social_sports.errors import ApiError, AuthenticationRequiredError, ClientValidationError
from social_sports.schemas.event import SportType
from social_sports.schemas.user import LoginCredentials, UserProfileUpdate, UserRegistrationRequest


class TestUsers:
    @pytest.mark.asyncio
    async def test_login(self, client, user):
        result = await users_api.login_user(client, {"email": "alice@example.com", "password": "secret"})
        assert result.token
        assert result.user.id == user["id"]

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, user):
        with pytest.raises(AuthenticationRequiredError):
            await users_api.login_user(client, LoginCredentials(email="alice@example.com", password="nope"))

    @pytest.mark.asyncio
    async def test_login_without_token_in_reply(self, client, backend):
        backend.force("POST", "/api/users/login", 200, {"userId": "user-9"})
        with pytest.raises(ApiError, match="No token received from the server"):
            await users_api.login_user(client, LoginCredentials(email="a@b.c", password="x"))

    @pytest.mark.asyncio
    async def test_login_empty_credentials(self, client, backend):
        with pytest.raises(ClientValidationError):
            await users_api.login_user(client, LoginCredentials(email="", password=""))
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_login_incomplete_dict_rejected_locally(self, client, backend):
        with pytest.raises(ClientValidationError):
            await users_api.login_user(client, {"email": "alice@example.com"})
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_register(self, client, backend):
        result = await users_api.register_user(
            client, UserRegistrationRequest(name="Bob", email="bob@example.com", password="pw")
        )
        assert result.token in backend.tokens
        assert result.user.email == "bob@example.com"

    @pytest.mark.asyncio
    async def test_register_tries_candidate_endpoints_in_order(self, client, backend):
        result = await users_api.register_user(
            client,
            UserRegistrationRequest(name="Bob", email="bob@example.com", password="pw"),
            endpoints=["/auth/register", "/users/register"],
        )
        assert result.token
        assert backend.calls("POST", "/api/auth/register")
        assert backend.calls("POST", "/api/users/register")

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client, user):
        with pytest.raises(ApiError, match="Email already registered"):
            await users_api.register_user(
                client, UserRegistrationRequest(name="Alice", email="alice@example.com", password="pw")
            )

    @pytest.mark.asyncio
    async def test_current_user(self, authed_client, user):
        me = await users_api.get_current_user(authed_client)
        assert me.id == user["id"]
        assert me.name == "Alice"

    @pytest.mark.asyncio
    async def test_update_profile(self, authed_client, user):
        profile = await users_api.update_user_profile(
            authed_client,
            user["id"],
            UserProfileUpdate(name="Alice B", favorite_sports=[SportType.PADEL]),
        )
        assert profile.name == "Alice B"
        assert profile.favorite_sports == [SportType.PADEL]

    @pytest.mark.asyncio
    async def test_update_other_profile_forbidden(self, authed_client, backend):
        other = backend.add_user(name="Bob", email="bob@example.com")
        with pytest.raises(ApiError) as exc_info:
            await users_api.update_user_profile(authed_client, other["id"], UserProfileUpdate(name="X"))
        assert exc_info.value.status_code == 403


class TestWhatsApp:
    @pytest.mark.asyncio
    async def test_qr_code(self, authed_client):
        qr = await whatsapp_api.get_qr_code(authed_client)
        assert qr.qr_code_url == "https://wa.me/qr/TESTCODE"

    @pytest.mark.asyncio
    async def test_qr_code_service_missing(self, authed_client, backend):
        backend.whatsapp_enabled = False
        qr = await whatsapp_api.get_qr_code(authed_client)
        assert qr.is_empty

    @pytest.mark.asyncio
    async def test_status_and_link(self, authed_client, user):
        status = await whatsapp_api.get_status(authed_client)
        assert status.connected is False
        result = await whatsapp_api.link_account(authed_client, user["id"], "+31600000000")
        assert result.success is True

    @pytest.mark.asyncio
    async def test_probe(self, client, backend):
        assert await whatsapp_api.probe_backend(client) is True
        backend.whatsapp_enabled = False
        assert await whatsapp_api.probe_backend(client) is False


class TestMisc:
    @pytest.mark.asyncio
    async def test_platform_stats(self, client):
        stats = await stats_api.get_platform_stats(client)
        assert stats.active_players == 120
        assert stats.player_rating == pytest.approx(4.8)

    @pytest.mark.asyncio
    async def test_test_data_summary(self, client, user):
        assert await test_data_api.get_test_data_summary(client) == {"users": 1, "events": 0}
