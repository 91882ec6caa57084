"""Abstract contract for locally stored user accounts."""

from abc import ABC, abstractmethod
from typing import Any

User = dict[str, Any]


class UserRepository(ABC):
    """Lookup of user accounts referenced by locally signed tokens."""

    @abstractmethod
    def get_user(self, *, user_id: str) -> User | None:
        """Return the user record, or None when it does not exist.

        Raises:
            MetadataStoreError: If the lookup fails
        """
