"""Request-scoped authenticated identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plaza.domain.user.aggregates import User


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """
    Immutable identity of the caller for one request.

    Built once by the identity resolver and stored on
    ``request.state.identity``. Never shared between requests.
    """

    user: User
    authority: str

    @classmethod
    def create(cls, user: User) -> AuthenticatedIdentity:
        return cls(user=user, authority=user.role.authority)

    @property
    def user_id(self) -> int:
        return self.user.id  # type: ignore[return-value]

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def is_admin(self) -> bool:
        return self.authority == "ROLE_ADMIN"

    def __str__(self) -> str:
        return f"AuthenticatedIdentity({self.email})"

    def __repr__(self) -> str:
        return (
            f"AuthenticatedIdentity(user_id={self.user_id}, "
            f"authority={self.authority!r})"
        )
