"""
Application layer: session/entitlement state, gates and use cases.

Only `container.build_container` wires these together; pages (or scripts)
read the stores and call the use cases.
"""

from .auth_redirect import AuthRedirect
from .entitlement_store import EntitlementStore
from .feature_gate import FeatureGate, GateDecision, GateStatus
from .logout_flag import LogoutFlag
from .session_store import SessionStore

__all__ = [
    "AuthRedirect",
    "EntitlementStore",
    "FeatureGate",
    "GateDecision",
    "GateStatus",
    "LogoutFlag",
    "SessionStore",
]
