"""
============================================================
TARJETA CRC — application/entitlement_store.py
============================================================
Class: EntitlementStore

Responsibilities:
  - Derivar y cachear el EntitlementSnapshot de la Identity actual.
  - Re-fetch completo de /subscriptions/features en cada cambio de Identity.
  - Caer al snapshot FREE por defecto si no hay Identity o el fetch falla:
    la falta de entitlements nunca bloquea el render.
  - Descartar resultados de fetches superados por uno más nuevo.

Collaborators:
  - application.session_store.SessionStore (fuente de Identity)
  - infrastructure.api.billing.SubscriptionsApi
  - crosscutting.metrics (record_entitlement_fallback)
============================================================
"""

from __future__ import annotations

from typing import Callable

from ..crosscutting.exceptions import LeaveMarkerError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_entitlement_fallback
from ..domain.entitlements import DEFAULT_ENTITLEMENTS, EntitlementSnapshot
from ..domain.identity import Identity
from ..infrastructure.api.billing import SubscriptionsApi
from .session_store import SessionStore


class EntitlementStore:
    """R: Single source of truth for feature gates."""

    def __init__(self, subscriptions_api: SubscriptionsApi, session: SessionStore):
        self._subscriptions = subscriptions_api
        self._session = session
        self._snapshot: EntitlementSnapshot | None = None
        self._loading = False
        self._generation = 0
        self._unsubscribe: Callable[[], None] | None = session.add_listener(
            self._on_identity_changed
        )

    @property
    def snapshot(self) -> EntitlementSnapshot | None:
        """None hasta el primer snapshot resuelto."""
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def effective(self) -> EntitlementSnapshot:
        """Snapshot a usar ya mismo: mínimo privilegio mientras carga."""
        if self._loading or self._snapshot is None:
            return DEFAULT_ENTITLEMENTS
        return self._snapshot

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_identity_changed(self, identity: Identity | None) -> None:
        await self.refresh()

    async def refresh(self) -> EntitlementSnapshot:
        """R: Full re-derivation for the current identity."""
        self._generation += 1
        generation = self._generation

        if self._session.identity is None:
            record_entitlement_fallback("anonymous")
            return self._settle(generation, DEFAULT_ENTITLEMENTS)

        self._snapshot = None
        self._loading = True
        try:
            envelope = await self._subscriptions.features()
            if envelope.success and isinstance(envelope.data, dict):
                snapshot = EntitlementSnapshot.from_payload(envelope.data)
            else:
                logger.warning(
                    "feature lookup unsuccessful; using default entitlements",
                    extra={"server_message": envelope.message},
                )
                record_entitlement_fallback("unsuccessful")
                snapshot = DEFAULT_ENTITLEMENTS
        except (LeaveMarkerError, KeyError, ValueError, TypeError) as exc:
            logger.warning(
                "feature lookup failed; using default entitlements",
                extra={"error_type": type(exc).__name__, "error": str(exc)},
            )
            record_entitlement_fallback("error")
            snapshot = DEFAULT_ENTITLEMENTS

        return self._settle(generation, snapshot)

    def _settle(
        self, generation: int, snapshot: EntitlementSnapshot
    ) -> EntitlementSnapshot:
        if generation != self._generation:
            # Un refresh más nuevo ya está en curso o resuelto.
            logger.debug("discarding stale entitlement snapshot")
            return snapshot
        self._snapshot = snapshot
        self._loading = False
        return snapshot
