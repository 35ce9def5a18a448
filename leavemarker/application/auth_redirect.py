"""
Name: Authentication-lost redirect

Responsibilities:
  - Subscribe to AuthenticationLost and force a full navigation to login
  - Stay silent while a deliberate logout is underway
  - Stay silent on public routes (landing, login, signup, pricing)

Collaborators:
  - domain.events.AuthEventBus
  - domain.ports.Navigator
  - application.logout_flag.LogoutFlag
"""

from __future__ import annotations

from typing import Iterable

from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_lost
from ..domain.events import AuthenticationLost
from ..domain.ports import Navigator
from .logout_flag import LogoutFlag


class AuthRedirect:
    def __init__(
        self,
        navigator: Navigator,
        logout_flag: LogoutFlag,
        *,
        public_paths: Iterable[str],
        login_path: str = "/login",
    ):
        self._navigator = navigator
        self._logout_flag = logout_flag
        self._public_paths = frozenset(public_paths)
        self._login_path = login_path

    def __call__(self, event: AuthenticationLost) -> None:
        if self._logout_flag.is_set():
            record_auth_lost("ignored_logout")
            return

        current = self._navigator.current_path()
        if current in self._public_paths:
            record_auth_lost("ignored_public")
            return

        record_auth_lost("redirect")
        logger.info(
            "session rejected; redirecting to login",
            extra={"from_path": current, "api_path": event.path},
        )
        self._navigator.hard_navigate(self._login_path)
