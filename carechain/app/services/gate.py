"""Access gate: authorizes writes and filters reads of patient assets."""
from __future__ import annotations

import logging
from typing import Optional

from ..domain.errors import AccessDeniedError, AuthorizationError
from ..domain.models import PatientRecord
from ..domain.policy import WritePolicy, filter_grants
from ..infra.stub import ChaincodeStub
from .audit import AccessAuditor
from .identity import IdentityResolver
from .state import StateAccessor

logger = logging.getLogger(__name__)


class AccessGate:
    def __init__(
        self,
        policy: WritePolicy,
        system_key: str,
        auditor: Optional[AccessAuditor] = None,
    ) -> None:
        self.policy = policy
        self.system_key = system_key
        self.auditor = auditor

    def authorize_write(self, stub: ChaincodeStub, key: str, value: bytes) -> None:
        """Store ``value`` under ``key`` if the caller may replace that patient asset.

        The value must decode as a grant list; nothing is stored otherwise.
        """
        if key == self.system_key:
            resolver = IdentityResolver(stub)
            username = resolver.lookup("username")
            role = resolver.lookup("role")
            logger.warning("write to reserved key %s rejected", key)
            self._audit(username, role, "write", key, allowed=False)
            raise AuthorizationError(
                f"{username or 'anonymous caller'} cannot write {key}: "
                "it is reserved and can only be set by init",
                identity=username,
                role=role,
            )

        try:
            identity = self.policy.authorize(IdentityResolver(stub))
        except AuthorizationError as exc:
            logger.warning("write to %s rejected by %s policy", key, self.policy.name)
            self._audit(exc.identity, exc.role, "write", key, allowed=False)
            raise

        state = StateAccessor(stub)
        state.decode(key, value)
        state.put(key, value)
        logger.info("%s replaced the access records of %s", identity.username or identity.role, key)
        self._audit(identity.username, identity.role, "write", key, allowed=True)

    def authorized_read(self, stub: ChaincodeStub, key: str) -> bytes:
        """Return the grants of ``key`` addressed to the caller, re-encoded."""
        state = StateAccessor(stub)
        raw = state.get(key)
        if key == self.system_key:
            return raw

        record = state.decode(key, raw)
        doctor_id = IdentityResolver(stub).resolve("username")
        visible = filter_grants(record.access_grants, doctor_id)
        if not visible:
            logger.warning("%s has no access records on %s", doctor_id, key)
            self._audit(doctor_id, None, "read", key, allowed=False)
            raise AccessDeniedError(key)

        self._audit(doctor_id, None, "read", key, allowed=True)
        return state.encode(PatientRecord(patient_id=key, access_grants=visible))

    def _audit(
        self,
        actor_id: Optional[str],
        role: Optional[str],
        action: str,
        resource: str,
        allowed: bool,
    ) -> None:
        if self.auditor is not None:
            self.auditor.record(actor_id, role, action, resource, allowed)
