"""
Name: SessionStore Tests

Responsibilities:
  - Load settles into anonymous/authenticated and is idempotent
  - login/signup success and failure contracts
  - Race-safe logout (flag -> clear -> best-effort call -> landing)
  - login -> logout always ends anonymous with default entitlements
"""

import pytest

from conftest import fail, features_payload, login_payload, ok, session_payload
from leavemarker.crosscutting.exceptions import (
    AuthenticationFailedError,
    UnauthorizedError,
)
from leavemarker.domain.entitlements import DEFAULT_ENTITLEMENTS, Tier
from leavemarker.domain.identity import Role, SessionState
from leavemarker.infrastructure.api.schemas import SignupRequest

pytestmark = pytest.mark.unit


def _signup_request() -> SignupRequest:
    return SignupRequest(
        company_name="Acme",
        company_email="hr@acme.test",
        full_name="Ada Lovelace",
        email="ada@acme.test",
        password="secret1",
        employee_id="EMP-1",
        work_location="Pune",
    )


class TestInitialize:
    async def test_starts_unknown(self, container):
        assert container.session.state is SessionState.UNKNOWN
        assert container.session.identity is None

    async def test_valid_session_becomes_authenticated(self, container, backend):
        backend.on("GET", "/auth/verify-session", ok(session_payload()))
        backend.on("GET", "/subscriptions/features", ok(features_payload()))

        state = await container.session.initialize()

        assert state is SessionState.AUTHENTICATED
        assert container.session.identity.email == "ada@acme.test"
        assert container.session.identity.role is Role.HR_ADMIN
        assert container.entitlements.snapshot.tier is Tier.PRO

    async def test_rejected_session_becomes_anonymous(self, container, backend):
        backend.on("GET", "/auth/verify-session", fail(401, "No session"))

        state = await container.session.initialize()

        assert state is SessionState.ANONYMOUS
        assert container.entitlements.snapshot == DEFAULT_ENTITLEMENTS

    async def test_unreachable_backend_becomes_anonymous(self, container, backend):
        backend.on("GET", "/auth/verify-session", fail(500, "Down"))

        assert await container.session.initialize() is SessionState.ANONYMOUS
        assert container.session.is_loading is False

    async def test_malformed_identity_becomes_anonymous(self, container, backend):
        backend.on("GET", "/auth/verify-session", ok({"id": 1, "role": "GUEST"}))

        assert await container.session.initialize() is SessionState.ANONYMOUS

    @pytest.mark.parametrize(
        "verify_response",
        [ok(session_payload()), fail(401, "No session")],
    )
    async def test_initialize_is_idempotent(self, container, backend, verify_response):
        backend.on("GET", "/auth/verify-session", verify_response)
        backend.on("GET", "/subscriptions/features", ok(features_payload()))

        first = await container.session.initialize()
        first_identity = container.session.identity
        second = await container.session.initialize()

        assert first is second
        assert container.session.identity == first_identity

    async def test_initialize_clears_logout_flag(self, container, backend, session_storage):
        session_storage.set("isLoggingOut", "true")
        backend.on("GET", "/auth/verify-session", fail(401))

        await container.session.initialize()

        assert session_storage.get("isLoggingOut") is None


class TestLogin:
    async def test_login_success(self, container, backend, navigator):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on("POST", "/auth/login", ok(login_payload()))
        backend.on("GET", "/subscriptions/features", ok(features_payload()))
        await container.start()

        identity = await container.session.login("ada@acme.test", "secret1")

        assert identity.id == 7
        assert identity.email == "ada@acme.test"
        assert container.session.state is SessionState.AUTHENTICATED
        assert navigator.current_path() == "/dashboard"
        assert backend.bodies("POST", "/auth/login") == [
            {"email": "ada@acme.test", "password": "secret1"}
        ]
        # Entitlements are re-derived for the new identity.
        assert container.entitlements.snapshot.tier is Tier.PRO

    async def test_login_failure_keeps_state(self, container, backend, navigator):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on("POST", "/auth/login", fail(401, "Invalid email or password"))
        await container.start()

        with pytest.raises(AuthenticationFailedError) as exc_info:
            await container.session.login("ada@acme.test", "wrong")

        assert exc_info.value.message == "Invalid email or password"
        assert container.session.state is SessionState.ANONYMOUS
        assert navigator.hard_navigations() == []

    async def test_login_network_failure_uses_generic_message(
        self, container, backend
    ):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on("POST", "/auth/login", fail(502))
        await container.start()

        with pytest.raises(AuthenticationFailedError) as exc_info:
            await container.session.login("ada@acme.test", "secret1")

        assert exc_info.value.message == "Login failed"

    async def test_login_with_unusable_payload_fails(self, container, backend):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on("POST", "/auth/login", ok({"accessToken": "jwt"}))
        await container.start()

        with pytest.raises(AuthenticationFailedError, match="Login failed"):
            await container.session.login("ada@acme.test", "secret1")

        assert container.session.identity is None

    async def test_token_mode_persists_credentials(
        self, make_container, settings, backend, local_storage
    ):
        container = make_container(settings=settings.model_copy(update={"auth_mode": "token"}))
        backend.on("POST", "/auth/login", ok(login_payload()))
        await container.start()

        await container.session.login("ada@acme.test", "secret1")

        assert local_storage.get("auth_token") == "jwt-token"
        assert '"email": "ada@acme.test"' in local_storage.get("user")


class TestSignup:
    async def test_signup_success_uses_returned_email(self, container, backend, navigator):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on(
            "POST", "/auth/signup", ok(login_payload(email="admin@acme.test", role="SUPER_ADMIN"))
        )
        await container.start()

        identity = await container.session.signup(_signup_request())

        assert identity.email == "admin@acme.test"
        assert identity.role is Role.SUPER_ADMIN
        assert navigator.current_path() == "/dashboard"

    async def test_signup_validation_failure_is_flattened(self, container, backend):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on(
            "POST",
            "/auth/signup",
            fail(
                400,
                "Validation failed",
                {"email": "must be valid", "password": "too short"},
            ),
        )
        await container.start()

        with pytest.raises(AuthenticationFailedError) as exc_info:
            await container.session.signup(_signup_request())

        assert exc_info.value.message == "must be valid. too short"
        assert container.session.state is SessionState.ANONYMOUS


class TestLogout:
    async def _logged_in(self, container, backend):
        backend.on("GET", "/auth/verify-session", ok(session_payload()))
        backend.on("GET", "/subscriptions/features", ok(features_payload()))
        await container.start()
        container.navigator.navigate("/dashboard")

    async def test_login_then_logout_ends_anonymous_with_default_entitlements(
        self, container, backend
    ):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on("POST", "/auth/login", ok(login_payload()))
        backend.on("GET", "/subscriptions/features", ok(features_payload()))
        backend.on("POST", "/auth/logout", ok())
        await container.start()

        await container.session.login("ada@acme.test", "secret1")
        await container.session.logout()

        assert container.session.state is SessionState.ANONYMOUS
        assert container.session.identity is None
        assert container.entitlements.snapshot == DEFAULT_ENTITLEMENTS

    async def test_logout_sequence(self, container, backend, navigator, session_storage):
        await self._logged_in(container, backend)
        observed = []

        async def _on_logout_call(request):
            # Identity is already gone and the flag is up while the call runs.
            observed.append(
                (container.session.identity, session_storage.get("isLoggingOut"))
            )
            return ok()(request)

        backend.on("POST", "/auth/logout", _on_logout_call)

        await container.session.logout()

        assert observed == [(None, "true")]
        assert navigator.hard_navigations() == ["/"]
        # The flag survives the navigation; it is cleared on next load.
        assert session_storage.get("isLoggingOut") == "true"

    async def test_logout_swallows_server_failure(self, container, backend, navigator):
        await self._logged_in(container, backend)
        backend.on("POST", "/auth/logout", fail(500, "Boom"))

        await container.session.logout()

        assert container.session.state is SessionState.ANONYMOUS
        assert navigator.hard_navigations() == ["/"]

    async def test_logout_race_does_not_redirect_to_login(
        self, container, backend, navigator
    ):
        await self._logged_in(container, backend)
        backend.on("POST", "/auth/logout", fail(401, "Session expired"))

        await container.session.logout()

        assert "/login" not in navigator.hard_navigations()
        assert navigator.hard_navigations() == ["/"]

    async def test_next_load_after_logout_is_clean(
        self, container, backend, session_storage
    ):
        await self._logged_in(container, backend)
        backend.on("POST", "/auth/logout", ok())
        await container.session.logout()

        backend.on("GET", "/auth/verify-session", fail(401))
        await container.start()

        assert session_storage.get("isLoggingOut") is None
        assert container.session.state is SessionState.ANONYMOUS

    async def test_login_after_logout_restores_login_redirect(
        self, container, backend, navigator, session_storage
    ):
        backend.on("GET", "/auth/verify-session", fail(401))
        backend.on("POST", "/auth/login", ok(login_payload()))
        backend.on("GET", "/subscriptions/features", ok(features_payload()))
        backend.on("POST", "/auth/logout", ok())
        backend.on("GET", "/employees", fail(401, "Session expired"))
        await container.start()

        await container.session.login("ada@acme.test", "secret1")
        await container.session.logout()
        await container.session.login("ada@acme.test", "secret1")

        assert session_storage.get("isLoggingOut") is None

        navigator.navigate("/dashboard/employees")
        with pytest.raises(UnauthorizedError):
            await container.api.employees.list_all()

        assert navigator.hard_navigations() == ["/", "/login"]
        assert container.session.state is SessionState.ANONYMOUS


class TestListeners:
    async def test_listener_can_be_removed(self, container, backend):
        seen = []

        async def _listener(identity):
            seen.append(identity)

        remove = container.session.add_listener(_listener)
        remove()
        backend.on("GET", "/auth/verify-session", fail(401))

        await container.start()

        assert seen == []

    async def test_authentication_lost_drops_identity(self, container, backend):
        backend.on("GET", "/auth/verify-session", ok(session_payload()))
        backend.on("GET", "/subscriptions/features", ok(features_payload()))
        await container.start()
        backend.on("GET", "/employees", fail(401))

        with pytest.raises(UnauthorizedError):
            await container.api.employees.list_all()

        assert container.session.state is SessionState.ANONYMOUS
        assert container.entitlements.snapshot == DEFAULT_ENTITLEMENTS
