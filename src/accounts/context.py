"""Explicit caller context handed to services instead of ambient session state."""
from __future__ import annotations

from dataclasses import dataclass, field

from accounts.models import ADMIN_ROLES


@dataclass(frozen=True)
class SessionContext:
    """Who is calling, and with which roles.

    Built once per request (or task) and passed down explicitly; nothing is
    stored in thread-locals or module globals.
    """

    user: object
    roles: frozenset = field(default_factory=frozenset)
    is_superuser: bool = False

    @classmethod
    def for_user(cls, user) -> "SessionContext":
        if user is None or not getattr(user, "is_authenticated", False):
            return cls(user=None)
        return cls(
            user=user,
            roles=user.role_codes,
            is_superuser=bool(user.is_superuser),
        )

    @classmethod
    def from_request(cls, request) -> "SessionContext":
        return cls.for_user(getattr(request, "user", None))

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.is_superuser or bool(self.roles & ADMIN_ROLES)

    def has_role(self, *roles) -> bool:
        return self.is_superuser or any(str(role) in self.roles for role in roles)
