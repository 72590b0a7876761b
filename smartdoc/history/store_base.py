from abc import ABC, abstractmethod


class BaseKeyValueStore(ABC):
    """Contract for blocking key-value persistence providers."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent.

        Raises:
            PersistenceCorruptError: if the backing storage cannot be decoded.
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is not an error."""
