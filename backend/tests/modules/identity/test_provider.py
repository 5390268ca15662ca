"""Tests for identity provider implementations."""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from supabase import AuthApiError, AuthRetryableError, AuthSessionMissingError

from modules.identity import (
    IIdentityProvider,
    Identity,
    IdentityProviderError,
    InMemoryIdentityProvider,
    ProviderErrorKind,
    SupabaseIdentityProvider,
)
from modules.identity.provider import classify_auth_error, classify_message


def make_user(user_id="u1", email="asha@uni.edu", confirmed=True, identities=None):
    """Build an object shaped like a Supabase User."""
    return SimpleNamespace(
        id=user_id,
        email=email,
        email_confirmed_at=datetime.now(timezone.utc) if confirmed else None,
        identities=identities if identities is not None else [SimpleNamespace(id="i1")],
    )


class TestInterfaces:
    def test_implementations_satisfy_protocol(self):
        assert isinstance(InMemoryIdentityProvider(), IIdentityProvider)
        assert isinstance(SupabaseIdentityProvider(MagicMock()), IIdentityProvider)


class TestInMemoryIdentityProvider:
    @pytest.mark.asyncio
    async def test_sign_up_creates_unverified_identity(self, identity_provider):
        identity = await identity_provider.sign_up("asha@uni.edu", "Secret123")

        assert identity == Identity(id="u1", email="asha@uni.edu", email_verified=False)
        assert identity_provider.current_identity() == identity

    @pytest.mark.asyncio
    async def test_sign_up_duplicate_email(self, identity_provider):
        await identity_provider.sign_up("asha@uni.edu", "Secret123")

        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.sign_up("ASHA@uni.edu", "Secret123")
        assert exc_info.value.kind == ProviderErrorKind.EMAIL_TAKEN

    @pytest.mark.asyncio
    async def test_sign_up_weak_password(self, identity_provider):
        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.sign_up("asha@uni.edu", "abc")
        assert exc_info.value.kind == ProviderErrorKind.WEAK_PASSWORD

    @pytest.mark.asyncio
    async def test_sign_up_invalid_email(self, identity_provider):
        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.sign_up("not-an-email", "Secret123")
        assert exc_info.value.kind == ProviderErrorKind.INVALID_EMAIL_FORMAT

    @pytest.mark.asyncio
    async def test_sign_in_unknown_user(self, identity_provider):
        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.sign_in("ghost@uni.edu", "Secret123")
        assert exc_info.value.kind == ProviderErrorKind.NO_SUCH_USER

    @pytest.mark.asyncio
    async def test_sign_in_wrong_password(self, identity_provider):
        await identity_provider.sign_up("asha@uni.edu", "Secret123")

        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.sign_in("asha@uni.edu", "Wrong123")
        assert exc_info.value.kind == ProviderErrorKind.BAD_CREDENTIALS

    @pytest.mark.asyncio
    async def test_verification_visible_only_after_reload(self, identity_provider):
        await identity_provider.sign_up("asha@uni.edu", "Secret123")
        identity_provider.verify_email("asha@uni.edu")

        assert identity_provider.current_identity().email_verified is False
        reloaded = await identity_provider.reload()
        assert reloaded.email_verified is True
        assert identity_provider.current_identity().email_verified is True

    @pytest.mark.asyncio
    async def test_sign_out_forgets_identity(self, identity_provider):
        await identity_provider.sign_up("asha@uni.edu", "Secret123")
        await identity_provider.sign_out()

        assert identity_provider.current_identity() is None
        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.reload()
        assert exc_info.value.kind == ProviderErrorKind.NO_USER_SIGNED_IN

    @pytest.mark.asyncio
    async def test_send_verification_email_requires_identity(self, identity_provider):
        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.send_verification_email()
        assert exc_info.value.kind == ProviderErrorKind.NO_USER_SIGNED_IN

        await identity_provider.sign_up("asha@uni.edu", "Secret123")
        await identity_provider.send_verification_email()
        assert identity_provider.verification_emails == ["asha@uni.edu"]

    @pytest.mark.asyncio
    async def test_password_reset(self, identity_provider):
        await identity_provider.sign_up("asha@uni.edu", "Secret123")
        await identity_provider.send_password_reset("asha@uni.edu")
        assert identity_provider.password_reset_emails == ["asha@uni.edu"]

        with pytest.raises(IdentityProviderError) as exc_info:
            await identity_provider.send_password_reset("ghost@uni.edu")
        assert exc_info.value.kind == ProviderErrorKind.NO_SUCH_USER

    def test_default_ids_are_unique(self):
        provider = InMemoryIdentityProvider()
        assert provider._id_factory() != provider._id_factory()


class TestClassification:
    def test_classify_message(self):
        assert classify_message("A network error occurred") == ProviderErrorKind.NETWORK
        assert classify_message("TOO_MANY_REQUESTS") == ProviderErrorKind.RATE_LIMITED
        assert classify_message("Email rate limit exceeded") == ProviderErrorKind.RATE_LIMITED
        assert classify_message("INVALID_LOGIN_CREDENTIALS") == ProviderErrorKind.BAD_CREDENTIALS
        assert classify_message("something else") == ProviderErrorKind.UNKNOWN
        assert classify_message(None) == ProviderErrorKind.UNKNOWN

    def test_classify_by_code(self):
        error = AuthApiError("User already registered", 422, "user_already_exists")
        assert classify_auth_error(error) == ProviderErrorKind.EMAIL_TAKEN

        error = AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        assert classify_auth_error(error) == ProviderErrorKind.BAD_CREDENTIALS

        error = AuthApiError("Email not confirmed", 400, "email_not_confirmed")
        assert classify_auth_error(error) == ProviderErrorKind.EMAIL_NOT_VERIFIED

    def test_classify_by_status(self):
        error = AuthApiError("Slow down", 429, None)
        assert classify_auth_error(error) == ProviderErrorKind.RATE_LIMITED

    def test_classify_by_type(self):
        assert classify_auth_error(AuthSessionMissingError()) == ProviderErrorKind.NO_USER_SIGNED_IN
        assert classify_auth_error(AuthRetryableError("timeout", 0)) == ProviderErrorKind.NETWORK

    def test_unclassified_error_is_unknown(self):
        error = AuthApiError("Database error saving new user", 500, "unexpected_failure")
        assert classify_auth_error(error) == ProviderErrorKind.UNKNOWN


class TestSupabaseIdentityProvider:
    def setup_method(self):
        self.client = MagicMock()
        self.provider = SupabaseIdentityProvider(self.client)

    @pytest.mark.asyncio
    async def test_sign_up(self):
        self.client.auth.sign_up.return_value = SimpleNamespace(user=make_user(confirmed=False))

        identity = await self.provider.sign_up("asha@uni.edu", "Secret123")

        self.client.auth.sign_up.assert_called_once_with(
            {"email": "asha@uni.edu", "password": "Secret123"}
        )
        assert identity == Identity(id="u1", email="asha@uni.edu", email_verified=False)

    @pytest.mark.asyncio
    async def test_sign_up_hidden_existing_account(self):
        """A user with no identities means the email is already registered."""
        self.client.auth.sign_up.return_value = SimpleNamespace(
            user=make_user(confirmed=False, identities=[])
        )

        with pytest.raises(IdentityProviderError) as exc_info:
            await self.provider.sign_up("asha@uni.edu", "Secret123")
        assert exc_info.value.kind == ProviderErrorKind.EMAIL_TAKEN

    @pytest.mark.asyncio
    async def test_sign_up_maps_auth_error(self):
        self.client.auth.sign_up.side_effect = AuthApiError(
            "Unable to validate email address: invalid format", 400, "email_address_invalid"
        )

        with pytest.raises(IdentityProviderError) as exc_info:
            await self.provider.sign_up("bad", "Secret123")
        assert exc_info.value.kind == ProviderErrorKind.INVALID_EMAIL_FORMAT

    @pytest.mark.asyncio
    async def test_sign_in(self):
        self.client.auth.sign_in_with_password.return_value = SimpleNamespace(user=make_user())

        identity = await self.provider.sign_in("asha@uni.edu", "Secret123")

        assert identity.email_verified is True

    @pytest.mark.asyncio
    async def test_sign_in_bad_credentials(self):
        self.client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", 400, "invalid_credentials"
        )

        with pytest.raises(IdentityProviderError) as exc_info:
            await self.provider.sign_in("asha@uni.edu", "nope")
        assert exc_info.value.kind == ProviderErrorKind.BAD_CREDENTIALS
        assert exc_info.value.raw_message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_sign_out_suppresses_errors(self):
        self.client.auth.sign_out.side_effect = AuthApiError("gone", 500, None)

        await self.provider.sign_out()

        self.client.auth.sign_out.assert_called_once()

    @pytest.mark.asyncio
    async def test_send_password_reset(self):
        await self.provider.send_password_reset("asha@uni.edu")
        self.client.auth.reset_password_for_email.assert_called_once_with("asha@uni.edu")

    @pytest.mark.asyncio
    async def test_send_verification_email_resends_signup(self):
        self.client.auth.get_session.return_value = SimpleNamespace(user=make_user(confirmed=False))

        await self.provider.send_verification_email()

        self.client.auth.resend.assert_called_once_with(
            {"type": "signup", "email": "asha@uni.edu"}
        )

    @pytest.mark.asyncio
    async def test_send_verification_email_without_session(self):
        self.client.auth.get_session.return_value = None

        with pytest.raises(IdentityProviderError) as exc_info:
            await self.provider.send_verification_email()
        assert exc_info.value.kind == ProviderErrorKind.NO_USER_SIGNED_IN
        self.client.auth.resend.assert_not_called()

    @pytest.mark.asyncio
    async def test_reload_reads_fresh_user(self):
        self.client.auth.get_user.return_value = SimpleNamespace(user=make_user(confirmed=True))

        identity = await self.provider.reload()

        self.client.auth.get_user.assert_called_once()
        assert identity.email_verified is True

    @pytest.mark.asyncio
    async def test_reload_without_session(self):
        self.client.auth.get_user.return_value = None

        with pytest.raises(IdentityProviderError) as exc_info:
            await self.provider.reload()
        assert exc_info.value.kind == ProviderErrorKind.NO_USER_SIGNED_IN

    def test_current_identity(self):
        self.client.auth.get_session.return_value = SimpleNamespace(user=make_user())
        assert self.provider.current_identity().id == "u1"

        self.client.auth.get_session.return_value = None
        assert self.provider.current_identity() is None

    def test_current_identity_swallows_auth_errors(self):
        self.client.auth.get_session.side_effect = AuthSessionMissingError()
        assert self.provider.current_identity() is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, call, args",
        [
            ("sign_up", "sign_up", ("asha@uni.edu", "Secret123")),
            ("sign_in", "sign_in_with_password", ("asha@uni.edu", "Secret123")),
            ("send_password_reset", "reset_password_for_email", ("asha@uni.edu",)),
            ("reload", "get_user", ()),
        ],
    )
    async def test_transport_failure_is_network_error(self, method, call, args):
        getattr(self.client.auth, call).side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(IdentityProviderError) as exc_info:
            await getattr(self.provider, method)(*args)
        assert exc_info.value.kind == ProviderErrorKind.NETWORK
        assert exc_info.value.message == "Network error. Please check your internet connection."

    @pytest.mark.asyncio
    async def test_resend_transport_failure_is_network_error(self):
        self.client.auth.get_session.return_value = SimpleNamespace(user=make_user(confirmed=False))
        self.client.auth.resend.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(IdentityProviderError) as exc_info:
            await self.provider.send_verification_email()
        assert exc_info.value.kind == ProviderErrorKind.NETWORK

    @pytest.mark.asyncio
    async def test_sign_out_suppresses_transport_errors(self):
        self.client.auth.sign_out.side_effect = httpx.ConnectError("Connection refused")
        await self.provider.sign_out()

    def test_current_identity_swallows_transport_errors(self):
        self.client.auth.get_session.side_effect = httpx.ConnectError("Connection refused")
        assert self.provider.current_identity() is None
