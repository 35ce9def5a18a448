"""
============================================================
TARJETA CRC — application/session_store.py
============================================================
Class: SessionStore

Responsibilities:
  - Único escritor de la Identity activa (una o ninguna).
  - Ciclo de vida: unknown -> (anonymous | authenticated).
  - login / signup / logout; logout a prueba de la carrera con el 401.
  - Notificar a los listeners (EntitlementStore) cada cambio de Identity.
  - Reaccionar a AuthenticationLost: la sesión fue rechazada por el servidor.

Collaborators:
  - infrastructure.api.auth.AuthApi
  - infrastructure.http.credentials (CredentialStrategy)
  - domain.ports.Navigator
  - application.logout_flag.LogoutFlag

Constraints:
  - No serializa login/signup/logout concurrentes (lo hace la UI).
  - Los errores de login/signup se devuelven como AuthenticationFailedError
    con el mensaje apto para UI; el estado no cambia.
============================================================
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from ..crosscutting.error_messages import get_error_message
from ..crosscutting.exceptions import AuthenticationFailedError, LeaveMarkerError
from ..crosscutting.logger import logger
from ..domain.events import AuthenticationLost
from ..domain.identity import Identity, SessionState
from ..domain.ports import Navigator
from ..infrastructure.api.auth import AuthApi
from ..infrastructure.api.schemas import LoginRequest, SignupRequest
from ..infrastructure.http.credentials import CredentialStrategy
from ..infrastructure.http.envelope import ApiEnvelope
from .logout_flag import LogoutFlag

IdentityListener = Callable[[Identity | None], Awaitable[None]]

LOGIN_FAILED_MESSAGE = "Login failed"
SIGNUP_FAILED_MESSAGE = "Signup failed"


class SessionStore:
    """R: Owns the authenticated identity and its lifecycle."""

    def __init__(
        self,
        auth_api: AuthApi,
        credentials: CredentialStrategy,
        navigator: Navigator,
        logout_flag: LogoutFlag,
        *,
        dashboard_path: str = "/dashboard",
        landing_path: str = "/",
    ):
        self._auth = auth_api
        self._credentials = credentials
        self._navigator = navigator
        self._logout_flag = logout_flag
        self._dashboard_path = dashboard_path
        self._landing_path = landing_path

        self._identity: Identity | None = None
        self._state = SessionState.UNKNOWN
        self._loading = False
        self._listeners: list[IdentityListener] = []

    # ------------------------------------------------------------------
    # Lectura
    # ------------------------------------------------------------------

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self._loading

    def add_listener(self, listener: IdentityListener) -> Callable[[], None]:
        """Registra un listener de cambios de Identity; devuelve el unsubscribe."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    # ------------------------------------------------------------------
    # Transiciones
    # ------------------------------------------------------------------

    async def _set_identity(self, identity: Identity | None) -> None:
        previous_state = self._state
        changed = identity != self._identity or previous_state is SessionState.UNKNOWN

        self._identity = identity
        self._state = (
            SessionState.AUTHENTICATED if identity is not None else SessionState.ANONYMOUS
        )
        if not changed:
            return

        logger.info(
            "session state changed",
            extra={
                "from_state": previous_state.value,
                "to_state": self._state.value,
                "role": identity.role.value if identity else None,
            },
        )
        for listener in list(self._listeners):
            await listener(identity)

    async def _verify_session(self) -> Identity | None:
        envelope = await self._auth.verify_session()
        if not envelope.success or not isinstance(envelope.data, dict):
            return None
        return Identity.from_payload(envelope.data)

    async def initialize(self) -> SessionState:
        """
        R: Application load: settle the session into anonymous/authenticated.

        Clears the logout flag left by a previous logout, then restores the
        identity through the credential strategy. Any failure means anonymous.
        """
        self._logout_flag.clear()
        self._loading = True
        try:
            identity = await self._credentials.restore(self._verify_session)
        except (LeaveMarkerError, KeyError, ValueError, TypeError) as exc:
            logger.info(
                "no active session",
                extra={"reason": type(exc).__name__},
            )
            identity = None
        finally:
            self._loading = False

        await self._set_identity(identity)
        return self._state

    async def _establish(
        self, envelope: ApiEnvelope, *, fallback: str, email: str | None
    ) -> Identity:
        data: Any = envelope.unwrap(fallback)
        if not isinstance(data, dict):
            raise AuthenticationFailedError(fallback)
        try:
            identity = Identity.from_payload(data, email=email or data.get("email"))
        except (KeyError, ValueError, TypeError) as exc:
            raise AuthenticationFailedError(fallback, original_error=exc) from exc

        self._credentials.persist(identity, data.get("accessToken"))
        # Sesión nueva: un logout previo en este proceso ya terminó.
        self._logout_flag.clear()
        await self._set_identity(identity)
        self._navigator.navigate(self._dashboard_path)
        return identity

    async def login(self, email: str, password: str) -> Identity:
        """
        R: Exchange credentials and become authenticated.

        Raises:
            AuthenticationFailedError: server message (or "Login failed");
                the session state is left unchanged.
        """
        try:
            envelope = await self._auth.login(
                LoginRequest(email=email, password=password)
            )
            return await self._establish(
                envelope, fallback=LOGIN_FAILED_MESSAGE, email=email
            )
        except AuthenticationFailedError:
            raise
        except LeaveMarkerError as exc:
            raise AuthenticationFailedError(
                get_error_message(exc, LOGIN_FAILED_MESSAGE), original_error=exc
            ) from exc

    async def signup(self, data: SignupRequest) -> Identity:
        """R: Register company + admin; same contract as login."""
        try:
            envelope = await self._auth.signup(data)
            # El backend devuelve el email del admin creado.
            payload_email = envelope.data_as_dict().get("email")
            return await self._establish(
                envelope,
                fallback=SIGNUP_FAILED_MESSAGE,
                email=payload_email or data.email,
            )
        except AuthenticationFailedError:
            raise
        except LeaveMarkerError as exc:
            raise AuthenticationFailedError(
                get_error_message(exc, SIGNUP_FAILED_MESSAGE), original_error=exc
            ) from exc

    async def logout(self) -> None:
        """
        R: Race-safe logout.

        flag -> identity cleared -> best-effort server logout -> hard
        navigation to landing. A failing server call is logged, not rolled back.
        """
        self._logout_flag.set()
        await self._set_identity(None)
        try:
            await self._auth.logout()
        except LeaveMarkerError as exc:
            logger.warning(
                "server logout failed; continuing",
                extra={"error_type": type(exc).__name__, "error": str(exc)},
            )
        self._credentials.clear()
        self._navigator.hard_navigate(self._landing_path)

    async def handle_authentication_lost(self, event: AuthenticationLost) -> None:
        """R: The server rejected the session: drop identity and local credentials."""
        self._credentials.clear()
        await self._set_identity(None)
