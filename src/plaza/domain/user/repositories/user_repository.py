"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from plaza.domain.shared.pagination import Page, PageRequest
from plaza.domain.user.aggregates.user import User
from plaza.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their (normalized) email address."""

    @abstractmethod
    async def find_by_ids(self, user_ids: list[int]) -> dict[int, User]:
        """Load several users at once, keyed by id."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Insert or update a user.

        Raises EmailAlreadyExistsError when the storage uniqueness
        constraint on email rejects the write.
        """

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""

    @abstractmethod
    async def list_page(self, page_request: PageRequest) -> Page[User]:
        """List users ordered by creation time."""
