"""
===============================================================================
TARJETA CRC — leavemarker/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer el cliente: storage, estrategia de credenciales, bus de
    eventos, ApiClient, recursos REST, stores, suscriptores y casos de uso.
  - Elegir UNA estrategia de credenciales según Settings.auth_mode.
  - Exponer el ciclo de vida: start() = carga de la aplicación, aclose().

Colaboradores:
  - crosscutting.config.Settings
  - infrastructure.* (adaptadores concretos)
  - application.* (stores, gates, use cases)

Notas:
  - Sin singletons de módulo: cada app/test construye su propio container.
  - Este archivo NO contiene lógica de negocio.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Callable

import httpx

from .application import (
    AuthRedirect,
    EntitlementStore,
    FeatureGate,
    LogoutFlag,
    SessionStore,
)
from .application.usecases import (
    CheckoutPaths,
    DownloadReportUseCase,
    SubscribeToPlanUseCase,
)
from .application.usecases.download_report import utc_today
from .crosscutting.config import Settings, get_settings
from .crosscutting.logger import logger
from .domain.events import AuthEventBus
from .domain.identity import Identity
from .domain.navigation import NAVIGATION, NavEntry, filter_navigation
from .domain.ports import CheckoutProvider, DownloadSink, KeyValueStorage, Navigator
from .infrastructure.api import LeaveMarkerApi
from .infrastructure.downloads import FileSystemDownloadSink
from .infrastructure.http.client import ApiClient
from .infrastructure.http.credentials import (
    CookieCredentials,
    CredentialStrategy,
    TokenCredentials,
)
from .infrastructure.navigation import InMemoryNavigator
from .infrastructure.storage import InMemoryStorage, JsonFileStorage


def build_local_storage(settings: Settings) -> KeyValueStorage:
    """Storage durable: archivo JSON si está configurado, si no en memoria."""
    if settings.local_storage_path:
        return JsonFileStorage(settings.local_storage_path)
    return InMemoryStorage()


def build_credentials(
    settings: Settings, local_storage: KeyValueStorage
) -> CredentialStrategy:
    """Estrategia elegida una sola vez al arrancar."""
    if settings.uses_cookies():
        return CookieCredentials()
    return TokenCredentials(
        local_storage,
        token_key=settings.token_storage_key,
        user_key=settings.user_storage_key,
    )


@dataclass
class ClientContainer:
    """R: Everything a page needs, wired for one application instance."""

    settings: Settings
    navigator: Navigator
    session_storage: KeyValueStorage
    local_storage: KeyValueStorage
    credentials: CredentialStrategy
    events: AuthEventBus
    client: ApiClient
    api: LeaveMarkerApi
    logout_flag: LogoutFlag
    session: SessionStore
    entitlements: EntitlementStore
    auth_redirect: AuthRedirect
    feature_gate: FeatureGate
    download_report: DownloadReportUseCase
    checkout: CheckoutProvider | None = None
    navigation: tuple[NavEntry, ...] = NAVIGATION
    _unsubscribers: list[Callable[[], None]] = field(default_factory=list)

    @property
    def subscribe_to_plan(self) -> SubscribeToPlanUseCase:
        if self.checkout is None:
            raise RuntimeError("No checkout provider configured")
        return SubscribeToPlanUseCase(
            self.session,
            self.entitlements,
            self.api.subscriptions,
            self.api.payments,
            self.checkout,
            self.navigator,
            paths=CheckoutPaths(
                login=self.settings.login_path,
                dashboard=self.settings.dashboard_path,
                payment_success=self.settings.payment_success_path,
                payment_cancel=self.settings.payment_cancel_path,
            ),
            brand_name=self.settings.checkout_brand_name,
            theme_color=self.settings.checkout_theme_color,
        )

    def visible_navigation(self, identity: Identity | None = None) -> list[NavEntry]:
        """Re-derivada en cada llamada (nunca cacheada)."""
        if identity is None:
            identity = self.session.identity
        return filter_navigation(self.navigation, identity)

    async def start(self) -> None:
        """Carga de la aplicación: asienta la sesión (y con ella los entitlements)."""
        state = await self.session.initialize()
        logger.info(
            "client started",
            extra={"auth_mode": self.credentials.mode, "session_state": state.value},
        )

    async def aclose(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.entitlements.detach()
        await self.client.aclose()

    async def __aenter__(self) -> "ClientContainer":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_container(
    settings: Settings | None = None,
    *,
    navigator: Navigator | None = None,
    session_storage: KeyValueStorage | None = None,
    local_storage: KeyValueStorage | None = None,
    checkout: CheckoutProvider | None = None,
    download_sink: DownloadSink | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], datetime] = datetime.now,
    today: Callable[[], date] = utc_today,
) -> ClientContainer:
    """
    R: Wire a complete client.

    Adapters default to in-memory implementations; tests inject fakes and
    an `httpx.MockTransport` as the backend.
    """
    settings = settings or get_settings()
    navigator = navigator or InMemoryNavigator(settings.landing_path)
    session_storage = session_storage if session_storage is not None else InMemoryStorage()
    if local_storage is None:
        local_storage = build_local_storage(settings)

    credentials = build_credentials(settings, local_storage)
    events = AuthEventBus()
    client = ApiClient(
        settings.api_base_url,
        credentials=credentials,
        events=events,
        timeout_s=settings.http_timeout_seconds,
        retry_max_attempts=settings.retry_max_attempts,
        retry_base_delay_s=settings.retry_base_delay_seconds,
        retry_max_delay_s=settings.retry_max_delay_seconds,
        transport=transport,
    )
    api = LeaveMarkerApi(client, clock=clock)

    logout_flag = LogoutFlag(session_storage, settings.logout_flag_key)
    session = SessionStore(
        api.auth,
        credentials,
        navigator,
        logout_flag,
        dashboard_path=settings.dashboard_path,
        landing_path=settings.landing_path,
    )
    entitlements = EntitlementStore(api.subscriptions, session)
    auth_redirect = AuthRedirect(
        navigator,
        logout_flag,
        public_paths=settings.get_public_paths_list(),
        login_path=settings.login_path,
    )
    feature_gate = FeatureGate(entitlements, upgrade_path=settings.pricing_path)
    download_report = DownloadReportUseCase(
        api.reports,
        feature_gate,
        download_sink or FileSystemDownloadSink(Path(settings.download_dir)),
        today=today,
        default_range_days=settings.report_default_range_days,
    )

    # Orden de entrega: primero se descarta la sesión, después se redirige.
    unsubscribers = [
        events.subscribe(session.handle_authentication_lost),
        events.subscribe(auth_redirect),
    ]

    return ClientContainer(
        settings=settings,
        navigator=navigator,
        session_storage=session_storage,
        local_storage=local_storage,
        credentials=credentials,
        events=events,
        client=client,
        api=api,
        logout_flag=logout_flag,
        session=session,
        entitlements=entitlements,
        auth_redirect=auth_redirect,
        feature_gate=feature_gate,
        download_report=download_report,
        checkout=checkout,
        _unsubscribers=unsubscribers,
    )
