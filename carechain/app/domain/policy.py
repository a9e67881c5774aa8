"""Write policies and the read-side grant filter."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, Iterable, List, Optional

from .errors import AuthorizationError
from .models import AccessGrant

if TYPE_CHECKING:
    from ..config import Settings
    from ..services.identity import IdentityResolver


@dataclass(frozen=True)
class Identity:
    username: Optional[str]
    role: Optional[str] = None


class WritePolicy(ABC):
    """Decides whether the caller may create or replace a patient asset."""

    name = "base"

    @abstractmethod
    def authorize(self, resolver: "IdentityResolver") -> Identity:
        """Return the caller's identity or raise ``AuthorizationError``."""


class AllowListPolicy(WritePolicy):
    name = "allowlist"

    def __init__(self, writers: Iterable[str]) -> None:
        self.writers: FrozenSet[str] = frozenset(writers)

    def authorize(self, resolver: "IdentityResolver") -> Identity:
        username = resolver.resolve("username")
        if username not in self.writers:
            raise AuthorizationError(
                f"{username} does not have access to create a patient asset",
                identity=username,
            )
        return Identity(username=username)


class RolePolicy(WritePolicy):
    name = "role"

    def __init__(self, role: str = "Patient") -> None:
        self.role = role

    def authorize(self, resolver: "IdentityResolver") -> Identity:
        role = resolver.resolve("role")
        # username only feeds the audit trail and the rejection message
        username = resolver.lookup("username")
        if role != self.role:
            raise AuthorizationError(
                f"{username or 'anonymous caller'} with role {role} "
                "does not have access to create a patient asset",
                identity=username,
                role=role,
            )
        return Identity(username=username, role=role)


def build_write_policy(settings: "Settings") -> WritePolicy:
    if settings.write_policy == "role":
        return RolePolicy(settings.patient_role)
    if settings.write_policy == "allowlist":
        return AllowListPolicy(settings.privileged_writers)
    raise ValueError(f"Unknown write policy: {settings.write_policy}")


def filter_grants(grants: Iterable[AccessGrant], doctor_id: str) -> List[AccessGrant]:
    """Return the grants addressed to ``doctor_id``, in their stored order."""
    visible: List[AccessGrant] = []
    for grant in grants:
        if grant.doctor_id == doctor_id:
            visible.append(grant)
    return visible
