"""Abstract interface for persistent key-value stores."""

from abc import ABC, abstractmethod
from collections.abc import Iterator


class KeyValueStore(ABC):
    """String key-value store backing the move log.

    Implementations raise `StoreUnavailable` when the backing medium
    cannot be read or written.
    """

    @property
    def is_supported(self) -> bool:
        """Whether the store can be used at all in this environment."""
        return True

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Set a value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key (absent keys are ignored)."""
        pass

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over stored keys."""
        pass
