from __future__ import annotations

import logging

from ..core.enums import GateDecision
from ..core.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Shared-passcode check guarding coach-only mutations.

    This is a PIN, not authentication: one constant shared by every coach, plain
    string comparison, no lockout, no rate limiting and no notion of who is asking.
    Anyone holding the passcode has full privilege.
    """

    def __init__(self, passcode: str):
        self._passcode = passcode

    def challenge(self, secret) -> GateDecision:
        if secret == self._passcode:
            return GateDecision.ALLOW
        logger.warning("Passcode challenge denied")
        return GateDecision.DENY

    def require(self, secret, *, action: str = "this action") -> None:
        if self.challenge(secret) != GateDecision.ALLOW:
            raise AuthorizationError(f"Incorrect passcode. You do not have permission for {action}.")
